from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.app.services.password_hasher import PasswordHasher
from src.app.services.refresh_token_service import RefreshTokenService
from src.app.services.token_signer import TokenSigner

TEST_SECRET = "unit-test-secret"


class FakeClock:
    """Settable clock for expiry boundaries"""

    def __init__(self, start: datetime = datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int):
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.accounts = MagicMock()
    uow.accounts.get_by_email = AsyncMock(return_value=None)
    uow.accounts.get_by_id = AsyncMock(return_value=None)
    uow.accounts.get_by_login_handle = AsyncMock(return_value=None)
    uow.accounts.create = AsyncMock(side_effect=lambda account: account)
    uow.accounts.update_password_by_email = AsyncMock(return_value=1)

    uow.refresh_tokens = MagicMock()
    uow.refresh_tokens.get_by_account_id = AsyncMock(return_value=None)
    uow.refresh_tokens.get_by_token = AsyncMock(return_value=None)
    uow.refresh_tokens.create = AsyncMock(side_effect=lambda record: record)
    uow.refresh_tokens.delete = AsyncMock()

    uow.password_reset_otps = MagicMock()
    uow.password_reset_otps.get_by_account_id = AsyncMock(return_value=None)
    uow.password_reset_otps.get_by_account_and_otp = AsyncMock(return_value=None)
    uow.password_reset_otps.create = AsyncMock(side_effect=lambda record: record)
    uow.password_reset_otps.update = AsyncMock(side_effect=lambda record: record)
    uow.password_reset_otps.delete = AsyncMock()

    uow.movies = MagicMock()
    uow.movies.get_by_id = AsyncMock(return_value=None)
    uow.movies.list_all = AsyncMock(return_value=[])
    uow.movies.list_page = AsyncMock(return_value=[])
    uow.movies.count = AsyncMock(return_value=0)
    uow.movies.create = AsyncMock()
    uow.movies.update = AsyncMock(side_effect=lambda movie: movie)
    uow.movies.delete = AsyncMock()
    return uow


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def password_hasher():
    # Minimum bcrypt cost keeps the suite fast
    return PasswordHasher(rounds=4)


@pytest.fixture
def token_signer(clock):
    return TokenSigner(TEST_SECRET, ttl_seconds=25, clock=clock)


@pytest.fixture
def refresh_token_service(mock_uow, clock):
    return RefreshTokenService(mock_uow, ttl_seconds=30, clock=clock)
