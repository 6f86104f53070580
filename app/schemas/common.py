from pydantic import BaseModel


class SuccessResponseSchema(BaseModel):
    success: bool = True


class HealthResponseSchema(BaseModel):
    status: str = "ok"


class CsvExportResponseSchema(BaseModel):
    csv: str


class UploadResponseSchema(BaseModel):
    url: str
