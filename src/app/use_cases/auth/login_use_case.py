"""
Login Use Case

Authenticates email + password and returns an access/refresh token pair.
"""

from src.app.services.password_hasher import PasswordHasher
from src.app.services.refresh_token_service import RefreshTokenService
from src.app.services.token_signer import TokenSigner
from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Error, Result, Return
from .dtos import AuthResponse


class LoginUseCase:
    """
    Use case for user login and JWT issuance.

    Business Rules:
    - Unknown email and wrong password both yield INVALID_CREDENTIALS
    - A dummy bcrypt check runs for unknown emails to keep timing uniform
    - Locked, disabled and expired accounts are rejected before the password check
    - Expired credentials are rejected after it
    - A fresh access token is minted on every login
    - The refresh token is created on first login and reused afterwards
    """

    def __init__(
        self,
        uow: UnitOfWork,
        password_hasher: PasswordHasher,
        token_signer: TokenSigner,
        refresh_tokens: RefreshTokenService,
    ):
        self.uow = uow
        self.password_hasher = password_hasher
        self.token_signer = token_signer
        self.refresh_tokens = refresh_tokens

    async def execute(self, email: str, password: str) -> Result[AuthResponse]:
        """
        Execute login use case.

        Args:
            email: Account email
            password: Plain text password

        Returns:
            Result with AuthResponse, or Error
        """
        async with self.uow:
            account = await self.uow.accounts.get_by_email(email)

            if account is None:
                self.password_hasher.dummy_verify()
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if not account.account_non_locked:
                return Return.err(Error("ACCOUNT_LOCKED", "User account is locked"))

            if not account.enabled:
                return Return.err(Error("ACCOUNT_DISABLED", "User account is disabled"))

            if not account.account_non_expired:
                return Return.err(Error("ACCOUNT_EXPIRED", "User account has expired"))

            if not self.password_hasher.verify(password, account.password_hash):
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if not account.credentials_non_expired:
                return Return.err(
                    Error("CREDENTIALS_EXPIRED", "User credentials have expired")
                )

            access_token = self.token_signer.issue(
                account.email, {"role": account.role.value}
            )

            refresh_result = await self.refresh_tokens.create_or_get(account.email)
            if refresh_result.is_err():
                return refresh_result

            return Return.ok(
                AuthResponse(
                    access_token=access_token,
                    refresh_token=refresh_result.value.token,
                )
            )
