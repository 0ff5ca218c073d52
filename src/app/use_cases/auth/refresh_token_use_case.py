"""
Refresh Token Use Case

Exchanges a live refresh token for a new access token.
"""

from src.app.services.refresh_token_service import RefreshTokenService
from src.app.services.token_signer import TokenSigner
from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Error, Result, Return
from .dtos import AuthResponse


class RefreshTokenUseCase:
    """
    Use case for refreshing JWT access tokens.

    Business Rules:
    - Unknown token: TOKEN_NOT_FOUND
    - Expired token: deleted, TOKEN_EXPIRED
    - No rotation: the same refresh token value is returned
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_signer: TokenSigner,
        refresh_tokens: RefreshTokenService,
    ):
        self.uow = uow
        self.token_signer = token_signer
        self.refresh_tokens = refresh_tokens

    async def execute(self, refresh_token: str) -> Result[AuthResponse]:
        async with self.uow:
            verify_result = await self.refresh_tokens.verify(refresh_token)
            if verify_result.is_err():
                return verify_result

            record = verify_result.value
            account = await self.uow.accounts.get_by_id(record.account_id)
            if account is None:
                return Return.err(Error("ACCOUNT_NOT_FOUND", "Account not found"))

            access_token = self.token_signer.issue(
                account.email, {"role": account.role.value}
            )

            return Return.ok(
                AuthResponse(access_token=access_token, refresh_token=record.token)
            )
