import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from gallery_service.errors import MetadataCommitFailure, StorageWriteFailure
from gallery_service.ingest import ingest_upload
from gallery_service.models import Upload
from gallery_service.storage import UploadStorage
from gallery_service.validation import IncomingFile


def _count(db) -> int:
    return db.execute(select(func.count()).select_from(Upload)).scalar_one()


def test_concurrent_uploads_with_colliding_names(app, db, storage, png_bytes):
    database = app.state.database
    n = 12
    barrier = threading.Barrier(n)

    def one(i):
        session = database.session()
        try:
            incoming = IncomingFile(original_name="dup.png", content_type="image/png", data=png_bytes + bytes([i]))
            barrier.wait()
            record = asyncio.run(ingest_upload(incoming, session, storage, "public/uploads"))
            return record.id, record.url
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=n) as pool:
        results = list(pool.map(one, range(n)))

    ids = {r[0] for r in results}
    urls = {r[1] for r in results}
    assert len(ids) == n
    assert len(urls) == n
    assert len(list(storage.root.iterdir())) == n
    assert _count(db) == n

    for i, (_, url) in enumerate(results):
        name = url.rsplit("/", 1)[-1]
        assert (storage.root / name).read_bytes() == png_bytes + bytes([i])


def test_concurrent_http_uploads(client, db, storage, png_bytes):
    n = 8

    def post(i):
        files = {"file": ("same.png", png_bytes + bytes([i]), "image/png")}
        return client.post("/api/upload", files=files)

    with ThreadPoolExecutor(max_workers=n) as pool:
        responses = list(pool.map(post, range(n)))

    assert [r.status_code for r in responses] == [201] * n
    assert len({r.json()["upload"]["url"] for r in responses}) == n
    assert len(list(storage.root.iterdir())) == n
    assert _count(db) == n


def test_reload_failure_after_commit_keeps_file(client, storage, png_bytes, monkeypatch):
    from sqlalchemy.orm import Session

    def broken_refresh(self, instance, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(Session, "refresh", broken_refresh)
    files = {"file": ("x.png", png_bytes, "image/png")}
    r = client.post("/api/upload", files=files)
    assert r.status_code == 201, r.text
    upload = r.json()["upload"]
    monkeypatch.undo()

    listed = client.get("/api/uploads").json()["uploads"]
    assert [u["id"] for u in listed] == [upload["id"]]
    assert len(list(storage.root.iterdir())) == 1

    served = client.get(upload["url"])
    assert served.status_code == 200
    assert served.content == png_bytes


def test_metadata_failure_removes_written_file(db, storage, png_bytes, monkeypatch):
    def broken_commit():
        raise OperationalError("INSERT", {}, Exception("database is locked"))

    monkeypatch.setattr(db, "commit", broken_commit)
    incoming = IncomingFile(original_name="x.png", content_type="image/png", data=png_bytes)

    with pytest.raises(MetadataCommitFailure):
        asyncio.run(ingest_upload(incoming, db, storage, "public/uploads"))

    monkeypatch.undo()
    assert list(storage.root.iterdir()) == []
    assert _count(db) == 0


def test_storage_failure_creates_no_record(db, tmp_path, png_bytes):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("occupied")
    broken = UploadStorage(blocker / "uploads")
    incoming = IncomingFile(original_name="x.png", content_type="image/png", data=png_bytes)

    with pytest.raises(StorageWriteFailure):
        asyncio.run(ingest_upload(incoming, db, broken, "public/uploads"))

    assert _count(db) == 0


def test_storage_refuses_to_overwrite(tmp_path):
    storage = UploadStorage(tmp_path / "u")
    asyncio.run(storage.save("a.png", b"first"))
    with pytest.raises(FileExistsError):
        asyncio.run(storage.save("a.png", b"second"))
    assert (tmp_path / "u" / "a.png").read_bytes() == b"first"


def test_storage_delete(tmp_path):
    storage = UploadStorage(tmp_path / "u")
    asyncio.run(storage.save("a.png", b"x"))
    assert storage.delete("a.png") is True
    assert storage.delete("a.png") is False


def test_http_metadata_failure_is_500(client, app, storage, png_bytes, monkeypatch):
    from sqlalchemy.orm import Session

    def broken_commit(self):
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(Session, "commit", broken_commit)
    files = {"file": ("x.png", png_bytes, "image/png")}
    r = client.post("/api/upload", files=files)
    assert r.status_code == 500
    assert r.json()["detail"] == "Failed to save upload metadata"
    assert list(storage.root.iterdir()) == []
