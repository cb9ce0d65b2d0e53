from typing import Any, Callable

from sqlalchemy import select
from sqlalchemy.orm import Session

from .config import RECENT_UPLOADS_LIMIT
from .models import Upload


class UploadQueries:
    def __init__(self, db: Session, limit: int = RECENT_UPLOADS_LIMIT):
        self.db = db
        self.limit = limit

    def all(self) -> list[Upload]:
        return list(
            self.db.execute(select(Upload).order_by(Upload.created_at.desc()).limit(self.limit)).scalars().all()
        )

    def by_id(self, upload_id: str) -> Upload | None:
        return self.db.get(Upload, upload_id)


class ServerCaller:
    """
    Query facade for one inbound request.

    Results are memoized per operation for the caller's lifetime, so a page
    that asks for the same list twice hits the database once. Build a new
    caller per request.
    """

    def __init__(self, db: Session):
        self.queries = UploadQueries(db)
        self._memo: dict[tuple, Any] = {}

    def _cached(self, key: tuple, fn: Callable[[], Any]) -> Any:
        if key not in self._memo:
            self._memo[key] = fn()
        return self._memo[key]

    def upload_all(self) -> list[Upload]:
        return self._cached(("upload.all",), self.queries.all)

    def upload_by_id(self, upload_id: str) -> Upload | None:
        return self._cached(("upload.byId", upload_id), lambda: self.queries.by_id(upload_id))
