from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.password_reset_otp_repository import IPasswordResetOtpRepository
from src.domain.entities import PasswordResetOtp


class PasswordResetOtpRepository(IPasswordResetOtpRepository):
    """PasswordResetOtp repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_account_id(self, account_id: UUID) -> Optional[PasswordResetOtp]:
        """Get the OTP record owned by an account"""
        stmt = select(PasswordResetOtp).where(PasswordResetOtp.account_id == account_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_account_and_otp(
        self, account_id: UUID, otp: int
    ) -> Optional[PasswordResetOtp]:
        """Get the OTP record matching both account and code exactly"""
        stmt = select(PasswordResetOtp).where(
            PasswordResetOtp.account_id == account_id,
            PasswordResetOtp.otp == otp,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, record: PasswordResetOtp) -> PasswordResetOtp:
        """Create a new OTP record"""
        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)
        return record

    async def update(self, record: PasswordResetOtp) -> PasswordResetOtp:
        """Update existing OTP record"""
        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)
        return record

    async def delete(self, record: PasswordResetOtp) -> None:
        """Delete an OTP record"""
        await self.session.delete(record)
        await self.session.flush()
