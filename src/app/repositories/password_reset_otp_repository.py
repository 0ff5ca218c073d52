from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import PasswordResetOtp


class IPasswordResetOtpRepository(ABC):
    """PasswordResetOtp repository interface - application layer"""

    @abstractmethod
    async def get_by_account_id(self, account_id: UUID) -> Optional[PasswordResetOtp]:
        """Get the OTP record owned by an account"""
        pass

    @abstractmethod
    async def get_by_account_and_otp(
        self, account_id: UUID, otp: int
    ) -> Optional[PasswordResetOtp]:
        """Get the OTP record matching both account and code exactly"""
        pass

    @abstractmethod
    async def create(self, record: PasswordResetOtp) -> PasswordResetOtp:
        """Create a new OTP record"""
        pass

    @abstractmethod
    async def update(self, record: PasswordResetOtp) -> PasswordResetOtp:
        """Update existing OTP record"""
        pass

    @abstractmethod
    async def delete(self, record: PasswordResetOtp) -> None:
        """Delete an OTP record"""
        pass
