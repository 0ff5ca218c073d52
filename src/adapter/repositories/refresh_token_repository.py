from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.refresh_token_repository import IRefreshTokenRepository
from src.domain.entities import RefreshToken


class RefreshTokenRepository(IRefreshTokenRepository):
    """RefreshToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_account_id(self, account_id: UUID) -> Optional[RefreshToken]:
        """Get the refresh token owned by an account"""
        stmt = select(RefreshToken).where(RefreshToken.account_id == account_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_token(self, token: str) -> Optional[RefreshToken]:
        """Get refresh token record by its opaque value"""
        stmt = select(RefreshToken).where(RefreshToken.token == token)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, refresh_token: RefreshToken) -> RefreshToken:
        """Create a new refresh token"""
        self.session.add(refresh_token)
        await self.session.flush()
        await self.session.refresh(refresh_token)
        return refresh_token

    async def delete(self, refresh_token: RefreshToken) -> None:
        """Delete a refresh token"""
        await self.session.delete(refresh_token)
        await self.session.flush()
