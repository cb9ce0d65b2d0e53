# tests/conftest.py
from __future__ import annotations

import datetime as dt
import uuid
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from gallery_service.config import Settings
from gallery_service.main import create_app
from gallery_service.models import Upload


# --------------------------------------------------------------------
# Settings pointing every path at a per-test temp directory
# --------------------------------------------------------------------
@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        base_dir=str(tmp_path),
        upload_dir="public/uploads",
        data_dir=str(tmp_path / "data"),
        log_level="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


# --------------------------------------------------------------------
# TestClient as a context manager so startup hooks create dirs/tables
# --------------------------------------------------------------------
@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(app, client):
    session = app.state.database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def storage(app, client):
    return app.state.storage


# --------------------------------------------------------------------
# Helpers
# --------------------------------------------------------------------
PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
    b"\x08\x06\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f"
    b"\x00\x00\x01\x01\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82"
)


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def make_upload(db):
    """Insert an Upload row directly, with a controllable created_at."""

    def _make(created_at: dt.datetime | None = None, name: str = "pic.png") -> Upload:
        record = Upload(
            id=str(uuid.uuid4()),
            original_name=name,
            mime_type="image/png",
            size=10,
            url=f"/uploads/{uuid.uuid4()}.png",
        )
        if created_at is not None:
            record.created_at = created_at
        db.add(record)
        db.commit()
        db.refresh(record)
        return record

    return _make
