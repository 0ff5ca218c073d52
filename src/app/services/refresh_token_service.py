"""
Refresh Token Service

Issues, stores and validates the single opaque refresh token each account owns.
"""

import logging
import secrets
from datetime import datetime
from typing import Callable

from sqlalchemy.exc import IntegrityError

from src.app.services.token_signer import utc_now
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import RefreshToken
from src.domain.result import Error, Result, Return

logger = logging.getLogger(__name__)


class RefreshTokenService:
    """
    Refresh token lifecycle.

    Business Rules:
    - One record per account, created lazily
    - An existing record is returned unchanged (no rotation, no extension)
    - A record found expired by verify() is deleted
    - Expects the caller to have entered the unit of work; commits its own writes
    """

    def __init__(
        self,
        uow: UnitOfWork,
        ttl_seconds: int = 30,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.uow = uow
        self.ttl_seconds = ttl_seconds
        self.clock = clock

    def _now_epoch(self) -> int:
        return int(self.clock().timestamp())

    async def create_or_get(self, email: str) -> Result[RefreshToken]:
        account = await self.uow.accounts.get_by_email(email)
        if account is None:
            return Return.err(Error("ACCOUNT_NOT_FOUND", "Account not found"))

        account_id = account.id
        existing = await self.uow.refresh_tokens.get_by_account_id(account_id)
        if existing is not None:
            return Return.ok(existing)

        record = RefreshToken(
            token=secrets.token_urlsafe(32),
            expires_at=self._now_epoch() + self.ttl_seconds,
            account_id=account_id,
        )
        try:
            record = await self.uow.refresh_tokens.create(record)
            await self.uow.commit()
        except IntegrityError:
            # Lost the insert race for this account; use the winner's token
            await self.uow.rollback()
            winner = await self.uow.refresh_tokens.get_by_account_id(account_id)
            if winner is None:
                raise
            return Return.ok(winner)

        logger.info(f"Refresh token issued for account {account_id}")
        return Return.ok(record)

    async def verify(self, token: str) -> Result[RefreshToken]:
        record = await self.uow.refresh_tokens.get_by_token(token)
        if record is None:
            return Return.err(Error("TOKEN_NOT_FOUND", "Refresh token not found"))

        if record.expires_at <= self._now_epoch():
            account_id = record.account_id
            await self.uow.refresh_tokens.delete(record)
            await self.uow.commit()
            logger.info(f"Expired refresh token removed for account {account_id}")
            return Return.err(Error("TOKEN_EXPIRED", "Refresh token has expired"))

        return Return.ok(record)
