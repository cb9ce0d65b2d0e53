from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB ceiling per uploaded file
MAX_REQUEST_BYTES = 12 * 1024 * 1024  # whole multipart body, leaves room for form overhead
RECENT_UPLOADS_LIMIT = 20


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    port: int = 8000
    base_dir: str = "."
    upload_dir: str = "public/uploads"
    data_dir: str = "data"
    database_url: str | None = None
    log_level: str = "INFO"

    @property
    def db_url(self) -> str:
        if self.database_url:
            return self.database_url
        # local sqlite file next to the service data
        return f"sqlite:///{self.data_dir.rstrip('/')}/gallery.db"

    @property
    def upload_root(self) -> Path:
        # UPLOAD_DIR is always relative to base_dir, even with a leading slash
        return Path(self.base_dir) / self.upload_dir.replace("\\", "/").lstrip("/")


settings = Settings()
