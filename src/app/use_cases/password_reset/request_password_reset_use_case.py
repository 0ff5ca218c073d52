"""
Request Password Reset Use Case

Issues a 6-digit OTP for a forgotten password and mails it to the account.
"""

import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable

from sqlalchemy.exc import IntegrityError

from src.app.services.notifier import INotifier
from src.app.services.token_signer import utc_now
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import PasswordResetOtp
from src.domain.result import Error, Result, Return
from .dtos import MessageResponse

logger = logging.getLogger(__name__)

OTP_MAIL_SUBJECT = "OTP for forgot password request"


def generate_otp() -> int:
    """Uniform in [100000, 999999]"""
    return secrets.randbelow(900000) + 100000


class RequestPasswordResetUseCase:
    """
    Use case for requesting a password reset OTP.

    Business Rules:
    - Unknown email: ACCOUNT_NOT_FOUND
    - One OTP record per account; a new request overwrites code and expiry
    - OTP expires OTP_TTL_SECONDS after issue
    - The record is committed before the mail goes out
    - A failed send is logged and does not fail the request
    """

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: INotifier,
        ttl_seconds: int = 70,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.uow = uow
        self.notifier = notifier
        self.ttl_seconds = ttl_seconds
        self.clock = clock

    async def execute(self, email: str) -> Result[MessageResponse]:
        async with self.uow:
            account = await self.uow.accounts.get_by_email(email)
            if account is None:
                return Return.err(
                    Error("ACCOUNT_NOT_FOUND", "Please provide a valid email!")
                )

            account_id = account.id
            otp = generate_otp()
            # Stored naive UTC, the DateTime column drops tzinfo on sqlite
            expires_at = (self.clock() + timedelta(seconds=self.ttl_seconds)).replace(
                tzinfo=None
            )

            record = await self.uow.password_reset_otps.get_by_account_id(account_id)
            if record is None:
                try:
                    await self.uow.password_reset_otps.create(
                        PasswordResetOtp(
                            otp=otp, expires_at=expires_at, account_id=account_id
                        )
                    )
                    await self.uow.commit()
                except IntegrityError:
                    # A concurrent request inserted first; overwrite its record
                    await self.uow.rollback()
                    record = await self.uow.password_reset_otps.get_by_account_id(
                        account_id
                    )
                    if record is None:
                        raise

            if record is not None:
                record.otp = otp
                record.expires_at = expires_at
                await self.uow.password_reset_otps.update(record)
                await self.uow.commit()

            logger.info(f"Password reset OTP issued for account {account_id}")

        body = (
            "This is the OTP (One Time Password) for your forgot password request: "
            f"{otp}"
        )
        try:
            await self.notifier.send(email, OTP_MAIL_SUBJECT, body)
        except OSError:
            logger.exception(f"Failed to send password reset OTP for account {account_id}")

        return Return.ok(MessageResponse(message="Email sent for verification"))
