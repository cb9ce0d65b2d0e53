from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ..config import MAX_FILE_SIZE
from ..errors import GalleryError
from ..ingest import ingest_upload
from ..logging_config import logger
from ..schemas import UploadOut, UploadResponse
from ..validation import read_incoming_file
from .deps import get_db, http_error

router = APIRouter(tags=["upload"])


@router.post("/api/upload", response_model=UploadResponse, status_code=201)
async def upload(request: Request, db: Session = Depends(get_db)):
    # the form is parsed by hand so a missing or non-file field is a 400, not a 422
    form = await request.form()
    try:
        result = await read_incoming_file(form.get("file"), MAX_FILE_SIZE)
    finally:
        await form.close()

    if not result.ok:
        logger.warning("Rejected upload: %s", result.error.message)
        raise http_error(result.error)

    settings = request.app.state.settings
    try:
        record = await ingest_upload(result.value, db, request.app.state.storage, settings.upload_dir)
    except GalleryError as e:
        raise http_error(e)

    return UploadResponse(upload=UploadOut.model_validate(record))
