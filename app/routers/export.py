from fastapi import APIRouter, Depends, Request
from app.schemas.common import CsvExportResponseSchema
from app.services.export import ExportService

router = APIRouter(tags=["Export"])


@router.get("/export-csv", response_model=CsvExportResponseSchema)
async def export_csv(
    request: Request,
    service: ExportService = Depends(ExportService.get_service),
):
    return CsvExportResponseSchema(csv=await service.export_csv(host=request.url.netloc))
