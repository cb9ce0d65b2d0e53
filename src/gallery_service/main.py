from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .api.routes_pages import router as pages_router
from .api.routes_query import router as query_router
from .api.routes_upload import router as upload_router
from .config import Settings, settings as default_settings
from .db import Database
from .logging_config import logger, setup_logging
from .middleware.limits import BodySizeLimitMiddleware
from .naming import public_prefix
from .storage import UploadStorage


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.log_level)

    app = FastAPI(title="Image Gallery Service", version="1.0.0")
    app.state.settings = settings
    app.state.database = database or Database(settings.db_url)
    app.state.storage = UploadStorage(settings.upload_root)

    app.add_middleware(BodySizeLimitMiddleware)

    @app.on_event("startup")
    def _startup():
        app.state.storage.root.mkdir(parents=True, exist_ok=True)
        app.state.database.init_db()
        logger.info("Serving uploads from %s", app.state.storage.root)

    @app.on_event("shutdown")
    def _shutdown():
        app.state.database.dispose()

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(upload_router)
    app.include_router(query_router)
    app.include_router(pages_router)

    # stored files are reachable at the same path their records carry in `url`
    app.mount(
        public_prefix(settings.upload_dir) or "/",
        StaticFiles(directory=str(settings.upload_root), check_dir=False),
        name="uploads",
    )
    return app


app = create_app()


def main():
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=default_settings.port)


if __name__ == "__main__":
    main()
