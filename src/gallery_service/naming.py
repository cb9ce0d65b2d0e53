"""Stored-file naming: extension, content type, unique name and public URL."""
from __future__ import annotations

import mimetypes
import os
import re
import time
import uuid

DEFAULT_EXTENSION = "bin"
DEFAULT_MIME_TYPE = "application/octet-stream"

_SAFE_EXTENSION = re.compile(r"^[a-z0-9]+$")
_REPEATED_SLASHES = re.compile(r"/+")


def _extension_from_name(original_name: str) -> str:
    base = original_name.replace("\\", "/").rsplit("/", 1)[-1]
    _, ext = os.path.splitext(base)
    ext = ext.lstrip(".").lower()
    return ext if _SAFE_EXTENSION.match(ext) else ""


def _extension_from_mime(mime_type: str | None) -> str:
    if not mime_type:
        return ""
    guessed = mimetypes.guess_extension(mime_type.split(";", 1)[0].strip().lower())
    return (guessed or "").lstrip(".").lower()


def resolve_extension(original_name: str | None, mime_type: str | None) -> str:
    """
    Extension for the stored file: name suffix first, then the declared
    content type, then ``bin``. Never used for anything but naming.
    """
    ext = _extension_from_name(original_name or "") or _extension_from_mime(mime_type)
    return ext or DEFAULT_EXTENSION


def guess_mime_type(extension: str) -> str | None:
    mime_type, _ = mimetypes.guess_type(f"file.{extension}")
    return mime_type


def resolve_mime_type(declared: str | None, extension: str) -> str:
    return declared or guess_mime_type(extension) or DEFAULT_MIME_TYPE


def generate_file_name(extension: str) -> str:
    return f"{int(time.time() * 1000)}-{uuid.uuid4()}.{extension}"


def public_prefix(upload_dir: str) -> str:
    """URL path the upload directory is served under, e.g. ``/uploads``."""
    normalized = _REPEATED_SLASHES.sub("/", upload_dir.replace("\\", "/")).strip("/")
    # public/ is the static root and is served at "/"
    if normalized == "public":
        normalized = ""
    elif normalized.startswith("public/"):
        normalized = normalized[len("public/"):]
    return f"/{normalized}".rstrip("/") if normalized else ""


def build_public_url(upload_dir: str, file_name: str) -> str:
    return _REPEATED_SLASHES.sub("/", f"{public_prefix(upload_dir)}/{file_name}")
