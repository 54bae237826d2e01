"""Local filesystem object storage for document files and task attachments.

Storage layout:
    <storage_dir>/documents/<epoch ms>_<id>.<ext>           — document files
    <storage_dir>/tasks/<task_id>/<epoch ms>_<id>.<ext>     — task attachments
"""

import asyncio
import logging
from pathlib import Path, PurePosixPath

from opsdesk.application.interfaces import ObjectStorage
from opsdesk.domain.exceptions import DataServiceError, ValidationError

logger = logging.getLogger(__name__)


class LocalObjectStorage(ObjectStorage):
    """Infrastructure adapter storing objects under a root directory on disk."""

    def __init__(self, storage_dir: str, base_url: str = "/files"):
        self._root = Path(storage_dir).resolve()
        self._root.mkdir(parents=True, exist_ok=True)
        self._base_url = base_url.rstrip("/")

    def _resolve(self, path: str) -> Path:
        """Map a storage path onto the root, rejecting anything that escapes it."""
        parts = PurePosixPath(path.replace("\\", "/")).parts
        if not parts or any(part in ("..", "/") for part in parts):
            raise ValidationError(f"Invalid storage path '{path}'", field="path")
        target = self._root.joinpath(*parts).resolve()
        if not target.is_relative_to(self._root):
            raise ValidationError(f"Invalid storage path '{path}'", field="path")
        return target

    def url_for(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    # ── ObjectStorage port ──────────────────────────────────────────

    async def upload(self, path: str, content: bytes) -> str:
        target = self._resolve(path)
        try:
            await asyncio.to_thread(self._write, target, content)
        except OSError as exc:
            raise DataServiceError("upload", path, str(exc)) from exc
        logger.info("Stored object: %s (%d bytes)", path, len(content))
        return self.url_for(path)

    async def download(self, path: str) -> bytes:
        target = self._resolve(path)
        try:
            return await asyncio.to_thread(target.read_bytes)
        except FileNotFoundError as exc:
            raise DataServiceError("download", path, "object not found") from exc
        except OSError as exc:
            raise DataServiceError("download", path, str(exc)) from exc

    async def delete(self, path: str) -> bool:
        """Delete a stored object.

        Returns True if deleted, False if not found. Empty parent
        directories are left in place.
        """
        target = self._resolve(path)
        if not target.exists():
            return False
        try:
            target.unlink(missing_ok=True)
        except OSError as exc:
            raise DataServiceError("delete", path, str(exc)) from exc
        logger.info("Deleted object: %s", path)
        return True

    @staticmethod
    def _write(target: Path, content: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
