from fastapi import APIRouter, Depends, File, Request, UploadFile
from app.schemas.common import UploadResponseSchema
from app.services.media import MediaService

router = APIRouter(tags=["Media"])


@router.post("/upload", response_model=UploadResponseSchema)
async def upload(
    request: Request,
    file: UploadFile | None = File(None),
    service: MediaService = Depends(MediaService.get_service),
):
    file_name = await service.upload(file)
    return UploadResponseSchema(url=str(request.url_for("media", path=file_name)))
