"""
Authenticate Request Use Case

Turns a bearer token into the caller's identity. Every failure collapses into
UNAUTHORIZED so the HTTP layer can answer 401/403 uniformly.
"""

from typing import Optional

from src.app.services.token_signer import TokenSigner
from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Error, Result, Return
from .dtos import Principal

UNAUTHENTICATED = Error("UNAUTHORIZED", "Authentication required")


class AuthenticateRequestUseCase:
    """
    Business Rules:
    - No token: unauthenticated
    - Subject cannot be extracted: unauthenticated
    - Subject has no account: unauthenticated
    - Token must verify (signature, subject, expiry) against the loaded account
    """

    def __init__(self, uow: UnitOfWork, token_signer: TokenSigner):
        self.uow = uow
        self.token_signer = token_signer

    async def execute(self, token: Optional[str]) -> Result[Principal]:
        if not token:
            return Return.err(UNAUTHENTICATED)

        subject_result = self.token_signer.extract_subject(token)
        if subject_result.is_err():
            return Return.err(UNAUTHENTICATED)

        async with self.uow:
            account = await self.uow.accounts.get_by_email(subject_result.value)
            if account is None:
                return Return.err(UNAUTHENTICATED)

            if not self.token_signer.verify(token, account.email):
                return Return.err(UNAUTHENTICATED)

            return Return.ok(
                Principal(
                    account_id=str(account.id),
                    name=account.display_name,
                    username=account.login_handle,
                    email=account.email,
                    role=account.role.value,
                )
            )
