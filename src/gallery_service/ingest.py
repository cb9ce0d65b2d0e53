import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import MetadataCommitFailure, StorageWriteFailure
from .logging_config import logger
from .models import Upload
from .naming import build_public_url, generate_file_name, resolve_extension, resolve_mime_type
from .storage import UploadStorage
from .validation import IncomingFile


async def ingest_upload(
    incoming: IncomingFile,
    db: Session,
    storage: UploadStorage,
    upload_dir: str,
) -> Upload:
    """
    Store an already validated file and record its metadata.

    The file is written first; the row is only inserted once the write
    succeeded. If the insert fails the written file is removed again.
    """
    extension = resolve_extension(incoming.original_name, incoming.content_type)
    file_name = generate_file_name(extension)

    try:
        stored_path = await storage.save(file_name, incoming.data)
    except OSError as e:
        logger.error("Failed to store %s (%s): %s", file_name, incoming.original_name, e, exc_info=True)
        raise StorageWriteFailure() from e

    record = Upload(
        id=str(uuid.uuid4()),
        original_name=incoming.original_name,
        mime_type=resolve_mime_type(incoming.content_type, extension),
        size=incoming.size,
        url=build_public_url(upload_dir, file_name),
    )
    try:
        db.add(record)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Failed to save metadata for %s: %s", stored_path, e, exc_info=True)
        if not storage.delete(file_name):
            logger.warning("Orphaned upload left on disk: %s", stored_path)
        raise MetadataCommitFailure() from e

    # the row is committed from here on; the file must stay even if reloading fails
    try:
        db.refresh(record)
    except SQLAlchemyError as e:
        logger.warning("Could not reload upload %s after commit: %s", record.id, e)

    logger.info("Stored upload %s (%d bytes) at %s", record.id, record.size, record.url)
    return record
