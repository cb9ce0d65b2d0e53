"""Input validators for the service boundary.

Each validator returns ``Ok(value)`` or ``Err(error)``; routes unwrap the
result and turn an ``Err`` into an HTTP error response.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar, Union

from starlette.datastructures import UploadFile

from .errors import EmptyFile, GalleryError, InvalidUploadId, MissingFile, PayloadTooLarge

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T
    ok: Literal[True] = True


@dataclass(frozen=True)
class Err:
    error: GalleryError
    ok: Literal[False] = False


Result = Union[Ok[T], Err]


@dataclass(frozen=True)
class IncomingFile:
    original_name: str
    content_type: str | None
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


async def read_incoming_file(value: Any, max_size: int) -> Result[IncomingFile]:
    """Checks presence, emptiness and the size ceiling, in that order."""
    if value is None or not isinstance(value, UploadFile):
        return Err(MissingFile())

    # one byte past the ceiling is enough to tell it's too large
    data = await value.read(max_size + 1)
    if len(data) == 0:
        return Err(EmptyFile())
    if len(data) > max_size:
        return Err(PayloadTooLarge())

    return Ok(
        IncomingFile(
            original_name=value.filename or "upload",
            content_type=value.content_type or None,
            data=data,
        )
    )


def validate_upload_id(raw: str) -> Result[str]:
    try:
        parsed = uuid.UUID(raw)
    except (ValueError, TypeError, AttributeError):
        return Err(InvalidUploadId())
    return Ok(str(parsed))
