"""Storage for uploaded listing images.

Images live in a flat directory on disk and are addressed by key; the public
URL of a key is ``{url_prefix}/{key}``, which the application serves as static
files.
"""

import logging
import secrets
import time
from pathlib import Path

from starlette.concurrency import run_in_threadpool

from marketplace.config import Settings

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/gif"}
MAX_IMAGE_BYTES = 10 * 1024 * 1024


class LocalImageStore:
    """Key to URL blob store backed by a local directory."""

    def __init__(self, directory: str | Path, url_prefix: str = "/uploads"):
        self.directory = Path(directory)
        self.url_prefix = url_prefix.rstrip("/")

    @classmethod
    def from_settings(cls, settings: Settings) -> "LocalImageStore":
        return cls(settings.upload_dir, settings.upload_url_prefix)

    def ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def generate_key(filename: str | None) -> str:
        """Build a unique key that keeps the uploaded file's extension."""
        suffix = Path(filename).suffix.lower() if filename else ""
        if not suffix[1:].isalnum():
            suffix = ""
        return f"image-{int(time.time() * 1000)}-{secrets.token_hex(4)}{suffix}"

    def url_for(self, key: str) -> str:
        return f"{self.url_prefix}/{key}"

    def _path_for(self, key: str) -> Path:
        if not key or key in {".", ".."} or Path(key).name != key:
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / key

    async def save(self, key: str, data: bytes) -> str:
        """Write an object and return its public URL."""
        path = self._path_for(key)
        self.ensure_directory()
        await run_in_threadpool(path.write_bytes, data)
        logger.info(f"Stored image {key} ({len(data)} bytes)")
        return self.url_for(key)

    async def delete(self, key: str) -> None:
        """Remove an object. Missing keys are ignored."""
        path = self._path_for(key)
        await run_in_threadpool(path.unlink, True)
        logger.info(f"Removed image {key}")
