import datetime as dt
from pydantic import BaseModel, ConfigDict


class UploadOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    original_name: str
    mime_type: str
    size: int
    url: str
    created_at: dt.datetime


class UploadResponse(BaseModel):
    upload: UploadOut


class UploadLookupResponse(BaseModel):
    upload: UploadOut | None = None


class UploadListResponse(BaseModel):
    uploads: list[UploadOut]
