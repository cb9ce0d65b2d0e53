from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ..errors import GalleryError
from ..queries import ServerCaller


def get_db(request: Request):
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()


def get_caller(db: Session = Depends(get_db)) -> ServerCaller:
    return ServerCaller(db)


def http_error(error: GalleryError) -> HTTPException:
    return HTTPException(status_code=error.status_code, detail=error.message)
