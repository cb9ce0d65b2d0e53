from pathlib import Path

from .logging_config import logger


class UploadStorage:
    """Local directory the uploaded files are written to."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def path_for(self, file_name: str) -> Path:
        return self.root / file_name

    async def save(self, file_name: str, data: bytes) -> Path:
        """Write the whole buffer; refuses to replace an existing file."""
        self.root.mkdir(parents=True, exist_ok=True)

        destination = self.path_for(file_name)
        with destination.open("xb") as out:
            out.write(data)
        return destination

    def delete(self, file_name: str) -> bool:
        try:
            self.path_for(file_name).unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning("Could not remove stored file %s: %s", file_name, e)
            return False
        return True
