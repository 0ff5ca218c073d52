import smtplib
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from src.app.use_cases.password_reset import RequestPasswordResetUseCase
from src.domain.entities import Account, PasswordResetOtp


@pytest.fixture
def account():
    return Account(
        id=uuid4(),
        display_name="Alice",
        login_handle="alice",
        email="alice@x.com",
        password_hash="x" * 60,
    )


@pytest.fixture
def notifier():
    notifier = MagicMock()
    notifier.send = AsyncMock()
    return notifier


@pytest.fixture
def use_case(mock_uow, notifier, clock):
    return RequestPasswordResetUseCase(mock_uow, notifier, ttl_seconds=70, clock=clock)


@pytest.mark.asyncio
async def test_request_reset_creates_otp_and_sends_mail(
    mock_uow, use_case, notifier, account, clock
):
    # Arrange
    mock_uow.accounts.get_by_email.return_value = account
    created = {}

    async def capture_create(record):
        created["record"] = record
        return record

    mock_uow.password_reset_otps.create.side_effect = capture_create

    # Act
    result = await use_case.execute("alice@x.com")

    # Assert
    assert result.is_ok()
    assert result.value.message == "Email sent for verification"

    record = created["record"]
    assert 100000 <= record.otp <= 999999
    assert record.account_id == account.id
    assert record.expires_at == (clock() + timedelta(seconds=70)).replace(tzinfo=None)
    mock_uow.commit.assert_called_once()

    notifier.send.assert_called_once()
    to_address, subject, body = notifier.send.call_args.args
    assert to_address == "alice@x.com"
    assert subject == "OTP for forgot password request"
    assert body.endswith(str(record.otp))


@pytest.mark.asyncio
async def test_request_reset_overwrites_existing_record(
    mock_uow, use_case, notifier, account, clock
):
    """A second request updates the single record in place"""
    # Arrange
    existing = PasswordResetOtp(
        otp=111111,
        expires_at=clock().replace(tzinfo=None),
        account_id=account.id,
    )
    mock_uow.accounts.get_by_email.return_value = account
    mock_uow.password_reset_otps.get_by_account_id.return_value = existing
    clock.advance(10)

    # Act
    result = await use_case.execute("alice@x.com")

    # Assert
    assert result.is_ok()
    mock_uow.password_reset_otps.create.assert_not_called()
    mock_uow.password_reset_otps.update.assert_called_once_with(existing)
    assert existing.expires_at == (clock() + timedelta(seconds=70)).replace(tzinfo=None)
    assert str(existing.otp) in notifier.send.call_args.args[2]


@pytest.mark.asyncio
async def test_request_reset_unknown_email(mock_uow, use_case, notifier):
    result = await use_case.execute("ghost@x.com")

    assert result.is_err()
    assert result.error.code == "ACCOUNT_NOT_FOUND"
    notifier.send.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_send_failure_not_surfaced(mock_uow, use_case, notifier, account):
    """OTP stays committed and the caller still gets success"""
    mock_uow.accounts.get_by_email.return_value = account
    notifier.send.side_effect = smtplib.SMTPServerDisconnected("connection lost")

    result = await use_case.execute("alice@x.com")

    assert result.is_ok()
    mock_uow.commit.assert_called_once()
    mock_uow.rollback.assert_not_called()


@pytest.mark.asyncio
async def test_request_reset_concurrent_insert_overwrites_winner(
    mock_uow, use_case, notifier, account, clock
):
    """Two first-time requests race; the loser updates the record the winner inserted"""
    # Arrange
    winner = PasswordResetOtp(
        otp=222222,
        expires_at=clock().replace(tzinfo=None),
        account_id=account.id,
    )
    mock_uow.accounts.get_by_email.return_value = account
    mock_uow.password_reset_otps.get_by_account_id.side_effect = [None, winner]
    mock_uow.password_reset_otps.create.side_effect = IntegrityError(
        "INSERT", {}, Exception("UNIQUE constraint failed")
    )

    # Act
    result = await use_case.execute("alice@x.com")

    # Assert
    assert result.is_ok()
    mock_uow.rollback.assert_called_once()
    mock_uow.password_reset_otps.update.assert_called_once_with(winner)
    assert winner.expires_at == (clock() + timedelta(seconds=70)).replace(tzinfo=None)
    notifier.send.assert_called_once()
    assert notifier.send.call_args.args[2].endswith(str(winner.otp))


@pytest.mark.asyncio
async def test_request_reset_integrity_error_without_winner_propagates(
    mock_uow, use_case, notifier, account
):
    # Arrange
    mock_uow.accounts.get_by_email.return_value = account
    mock_uow.password_reset_otps.create.side_effect = IntegrityError(
        "INSERT", {}, Exception("FOREIGN KEY constraint failed")
    )

    # Act / Assert
    with pytest.raises(IntegrityError):
        await use_case.execute("alice@x.com")
    notifier.send.assert_not_called()
