"""Filesystem-backed avatar storage."""

import asyncio
import re
import uuid
from pathlib import Path

import structlog

logger = structlog.get_logger()

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9._-]")
_MAX_NAME_LENGTH = 100


def sanitize_filename(filename: str) -> str:
    """Replace anything outside ``[A-Za-z0-9._-]`` and strip directory parts."""
    name = Path(filename.replace("\\", "/")).name or "avatar"
    name = _UNSAFE_FILENAME_CHARS.sub("_", name).lstrip(".") or "avatar"
    return name[-_MAX_NAME_LENGTH:]


class LocalAvatarStorage:
    """Writes avatars into a directory that is served as static files."""

    def __init__(self, directory: str | Path, url_prefix: str) -> None:
        self._directory = Path(directory)
        self._url_prefix = url_prefix.rstrip("/")

    async def save(self, data: bytes, filename: str) -> str:
        """Write the bytes under a collision-free name and return its URL path."""
        stored_name = f"{uuid.uuid4().hex}-{sanitize_filename(filename)}"
        path = self._directory / stored_name
        await asyncio.to_thread(self._write, path, data)
        logger.info("avatar_stored", filename=stored_name, size=len(data))
        return f"{self._url_prefix}/{stored_name}"

    async def delete(self, url: str) -> None:
        """Remove an avatar previously returned by ``save``."""
        prefix = f"{self._url_prefix}/"
        if not url.startswith(prefix):
            return
        stored_name = url[len(prefix):]
        if not stored_name or stored_name != sanitize_filename(stored_name):
            return
        await asyncio.to_thread((self._directory / stored_name).unlink, missing_ok=True)
        logger.info("avatar_discarded", filename=stored_name)

    def _write(self, path: Path, data: bytes) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
