"""
Change Password Use Case

Final step of the forgotten password flow.
"""

import logging

from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Error, Result, Return
from .dtos import MessageResponse

logger = logging.getLogger(__name__)


class ChangePasswordUseCase:
    """
    Use case for setting a new password by email.

    Business Rules:
    - Both inputs are compared after strip(); a difference is PASSWORD_MISMATCH
      and nothing is written
    - The trimmed password is hashed and written with a direct UPDATE
    - Unknown email: ACCOUNT_NOT_FOUND
    - Not tied to a prior OTP verification
    """

    def __init__(self, uow: UnitOfWork, password_hasher: PasswordHasher):
        self.uow = uow
        self.password_hasher = password_hasher

    async def execute(
        self, email: str, password: str, repeat_password: str
    ) -> Result[MessageResponse]:
        password = password.strip()
        if password != repeat_password.strip():
            return Return.err(
                Error("PASSWORD_MISMATCH", "Please enter the password again!")
            )

        async with self.uow:
            updated = await self.uow.accounts.update_password_by_email(
                email, self.password_hasher.hash(password)
            )
            if updated == 0:
                return Return.err(
                    Error("ACCOUNT_NOT_FOUND", "Please provide a valid email!")
                )

            await self.uow.commit()
            logger.info("Password changed via reset flow")

        return Return.ok(MessageResponse(message="Password changed successfully!"))
