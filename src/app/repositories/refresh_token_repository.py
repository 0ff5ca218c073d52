from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import RefreshToken


class IRefreshTokenRepository(ABC):
    """RefreshToken repository interface - application layer"""

    @abstractmethod
    async def get_by_account_id(self, account_id: UUID) -> Optional[RefreshToken]:
        """Get the refresh token owned by an account"""
        pass

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[RefreshToken]:
        """Get refresh token record by its opaque value"""
        pass

    @abstractmethod
    async def create(self, refresh_token: RefreshToken) -> RefreshToken:
        """Create a new refresh token"""
        pass

    @abstractmethod
    async def delete(self, refresh_token: RefreshToken) -> None:
        """Delete a refresh token"""
        pass
