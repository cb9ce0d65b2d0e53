from __future__ import annotations


class GalleryError(RuntimeError):
    status_code = 500
    message = "Internal error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class MissingFile(GalleryError):
    status_code = 400
    message = "Image file is required"


class EmptyFile(GalleryError):
    status_code = 400
    message = "File is empty"


class PayloadTooLarge(GalleryError):
    status_code = 413
    message = "File exceeds the 10MB size limit"


class InvalidUploadId(GalleryError):
    status_code = 400
    message = "Invalid upload id"


class StorageWriteFailure(GalleryError):
    status_code = 500
    message = "Failed to store file"


class MetadataCommitFailure(GalleryError):
    status_code = 500
    message = "Failed to save upload metadata"
