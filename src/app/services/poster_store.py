from abc import ABC, abstractmethod
from pathlib import PurePath

from src.domain.result import Result

ALLOWED_CONTENT_TYPES = ("image/png", "image/jpeg", "image/gif")

MEDIA_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
}


def media_type_for(name: str) -> str:
    return MEDIA_TYPES.get(PurePath(name).suffix.lower(), "application/octet-stream")


class IPosterStore(ABC):
    """Blob storage for movie poster files"""

    @abstractmethod
    async def save(self, filename: str, content_type: str, data: bytes) -> Result[str]:
        """Store a poster and return the generated stored name"""
        pass

    @abstractmethod
    async def open(self, name: str) -> Result[bytes]:
        """Read a stored poster"""
        pass

    @abstractmethod
    async def delete(self, name: str) -> None:
        """Remove a stored poster; missing files are ignored"""
        pass
