from uuid import uuid4

import pytest

from src.app.use_cases.auth import AuthenticateRequestUseCase
from src.domain.entities import Account, AccountRole


@pytest.fixture
def account():
    return Account(
        id=uuid4(),
        display_name="Alice",
        login_handle="alice",
        email="alice@x.com",
        password_hash="x" * 60,
        role=AccountRole.ADMIN,
    )


@pytest.fixture
def use_case(mock_uow, token_signer):
    return AuthenticateRequestUseCase(mock_uow, token_signer)


@pytest.mark.asyncio
async def test_valid_token_authenticates(mock_uow, use_case, token_signer, account):
    # Arrange
    mock_uow.accounts.get_by_email.return_value = account
    token = token_signer.issue("alice@x.com")

    # Act
    result = await use_case.execute(token)

    # Assert
    assert result.is_ok()
    principal = result.value
    assert principal.email == "alice@x.com"
    assert principal.account_id == str(account.id)
    assert principal.role == "ADMIN"
    mock_uow.accounts.get_by_email.assert_called_once_with("alice@x.com")


@pytest.mark.asyncio
async def test_missing_token_unauthenticated(mock_uow, use_case):
    result = await use_case.execute(None)

    assert result.is_err()
    assert result.error.code == "UNAUTHORIZED"
    mock_uow.accounts.get_by_email.assert_not_called()


@pytest.mark.asyncio
async def test_malformed_token_unauthenticated(mock_uow, use_case):
    result = await use_case.execute("garbage")

    assert result.error.code == "UNAUTHORIZED"
    mock_uow.accounts.get_by_email.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_subject_unauthenticated(mock_uow, use_case, token_signer):
    token = token_signer.issue("ghost@x.com")

    result = await use_case.execute(token)

    assert result.error.code == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_expired_token_unauthenticated(
    mock_uow, use_case, token_signer, clock, account
):
    """Subject is still extracted and the account loaded, then verification fails"""
    mock_uow.accounts.get_by_email.return_value = account
    token = token_signer.issue("alice@x.com")
    clock.advance(25)

    result = await use_case.execute(token)

    assert result.error.code == "UNAUTHORIZED"
    mock_uow.accounts.get_by_email.assert_called_once_with("alice@x.com")
