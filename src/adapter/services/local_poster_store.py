import asyncio
import logging
import uuid
from pathlib import Path

from src.app.services.poster_store import ALLOWED_CONTENT_TYPES, IPosterStore
from src.domain.result import Error, Result, Return

logger = logging.getLogger(__name__)


class LocalPosterStore(IPosterStore):
    """Posters kept as flat files in one directory"""

    def __init__(self, directory: str):
        self.directory = Path(directory)

    def _resolve(self, name: str) -> Result[Path]:
        if not name or "/" in name or "\\" in name or ".." in name:
            return Return.err(Error("INVALID_FILE_NAME", "Invalid file name"))
        return Return.ok(self.directory / name)

    def _write(self, name: str, data: bytes) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        (self.directory / name).write_bytes(data)

    async def save(self, filename: str, content_type: str, data: bytes) -> Result[str]:
        if not data:
            return Return.err(Error("EMPTY_FILE", "File is empty! Please send another file"))

        if content_type not in ALLOWED_CONTENT_TYPES:
            return Return.err(
                Error(
                    "UNSUPPORTED_FILE_TYPE",
                    "Only PNG, JPEG and GIF image files are allowed",
                )
            )

        basename = Path(filename or "").name
        if not basename:
            return Return.err(Error("INVALID_FILE_NAME", "Invalid file name"))

        stored_name = f"{uuid.uuid4()}_{basename}"
        await asyncio.to_thread(self._write, stored_name, data)

        logger.info(f"Poster stored as {stored_name}")
        return Return.ok(stored_name)

    async def open(self, name: str) -> Result[bytes]:
        path_result = self._resolve(name)
        if path_result.is_err():
            return path_result

        try:
            data = await asyncio.to_thread(path_result.value.read_bytes)
        except (FileNotFoundError, IsADirectoryError):
            return Return.err(Error("FILE_NOT_FOUND", f"File not found: {name}"))
        return Return.ok(data)

    async def delete(self, name: str) -> None:
        path_result = self._resolve(name)
        if path_result.is_err():
            return
        await asyncio.to_thread(path_result.value.unlink, missing_ok=True)
