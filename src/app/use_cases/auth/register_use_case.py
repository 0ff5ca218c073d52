"""
Register Use Case

Creates a USER account and returns its first token pair.
"""

import logging

from sqlalchemy.exc import IntegrityError

from src.app.services.password_hasher import PasswordHasher
from src.app.services.refresh_token_service import RefreshTokenService
from src.app.services.token_signer import TokenSigner
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Account, AccountRole
from src.domain.result import Error, Result, Return
from .dtos import AuthResponse, RegisterCommand

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Business Logic:
    1. Reject if the email or the username is already taken
    2. Hash password with bcrypt
    3. Create Account with role=USER and commit
    4. A unique violation at commit (concurrent register) is also ACCOUNT_EXISTS
    5. Issue an access token (sub=email)
    6. Create or reuse the account's refresh token
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

    async def execute(self, command: RegisterCommand) -> Result[AuthResponse]:
        async with self.uow:
            if await self.uow.accounts.get_by_email(command.email):
                return Return.err(Error("ACCOUNT_EXISTS", "Email already registered"))

            if await self.uow.accounts.get_by_login_handle(command.username):
                return Return.err(Error("ACCOUNT_EXISTS", "Username already taken"))

            account = Account(
                display_name=command.name,
                login_handle=command.username,
                email=command.email,
                password_hash=self.password_hasher.hash(command.password),
                role=AccountRole.USER,
            )
            try:
                account = await self.uow.accounts.create(account)
                await self.uow.commit()
            except IntegrityError:
                await self.uow.rollback()
                return Return.err(Error("ACCOUNT_EXISTS", "Account already exists"))

            email = account.email
            role = account.role
            logger.info(f"Account registered: {account.id}")

            access_token = self.token_signer.issue(email, {"role": role.value})

            refresh_result = await self.refresh_tokens.create_or_get(email)
            if refresh_result.is_err():
                return refresh_result

            return Return.ok(
                AuthResponse(
                    access_token=access_token,
                    refresh_token=refresh_result.value.token,
                )
            )
