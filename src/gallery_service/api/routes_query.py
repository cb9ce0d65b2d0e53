from fastapi import APIRouter, Depends

from ..queries import ServerCaller
from ..schemas import UploadListResponse, UploadLookupResponse, UploadOut
from ..validation import validate_upload_id
from .deps import get_caller, http_error

router = APIRouter(prefix="/api/uploads", tags=["uploads"])


@router.get("", response_model=UploadListResponse)
def list_uploads(caller: ServerCaller = Depends(get_caller)):
    return UploadListResponse(uploads=[UploadOut.model_validate(u) for u in caller.upload_all()])


@router.get("/{upload_id}", response_model=UploadLookupResponse)
def get_upload(upload_id: str, caller: ServerCaller = Depends(get_caller)):
    result = validate_upload_id(upload_id)
    if not result.ok:
        raise http_error(result.error)

    record = caller.upload_by_id(result.value)
    # unknown id is a normal empty result, not a 404
    return UploadLookupResponse(upload=UploadOut.model_validate(record) if record else None)
