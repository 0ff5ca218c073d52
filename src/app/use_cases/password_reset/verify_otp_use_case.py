"""
Verify OTP Use Case

Checks a submitted OTP against the account's stored one.
"""

import logging
from datetime import datetime
from typing import Callable

from src.app.services.token_signer import utc_now
from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Error, Result, Return
from .dtos import MessageResponse

logger = logging.getLogger(__name__)


class VerifyOtpUseCase:
    """
    Use case for verifying a password reset OTP.

    Business Rules:
    - Unknown email: ACCOUNT_NOT_FOUND
    - No record for the exact (account, otp) pair: OTP_MISMATCH
    - Record past its expiry: deleted, OTP_EXPIRED
    - A successful check leaves the record in place
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(self, email: str, otp: int) -> Result[MessageResponse]:
        async with self.uow:
            account = await self.uow.accounts.get_by_email(email)
            if account is None:
                return Return.err(
                    Error("ACCOUNT_NOT_FOUND", "Please provide a valid email!")
                )

            account_id = account.id
            record = await self.uow.password_reset_otps.get_by_account_and_otp(
                account_id, otp
            )
            if record is None:
                return Return.err(Error("OTP_MISMATCH", f"Invalid OTP for email {email}"))

            now = self.clock().replace(tzinfo=None)
            if record.expires_at < now:
                await self.uow.password_reset_otps.delete(record)
                await self.uow.commit()
                logger.info(f"Expired password reset OTP removed for account {account_id}")
                return Return.err(Error("OTP_EXPIRED", "OTP has expired"))

            return Return.ok(MessageResponse(message="OTP is verified"))
