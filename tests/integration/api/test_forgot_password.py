from datetime import datetime, timedelta

import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.entities import PasswordResetOtp


def other_otp(otp: int) -> int:
    return otp + 1 if otp < 999999 else otp - 1


@pytest.mark.asyncio
async def test_verify_mail_sends_otp(client: AsyncClient, notifier, test_data):
    """Request OTP

    Given a registered account
    When I POST /forgotPassword/verifyMail/{email}
    Then a 6-digit OTP is mailed to that address
    """
    await client.post("/api/v1/auth/register", json=test_data.get("alice"))

    response = await client.post("/forgotPassword/verifyMail/alice@x.com")

    assert response.status_code == 200
    assert response.json()["message"] == "Email sent for verification"
    to_address, subject, _ = notifier.sent[-1]
    assert to_address == "alice@x.com"
    assert subject == "OTP for forgot password request"
    assert 100000 <= notifier.last_otp() <= 999999


@pytest.mark.asyncio
async def test_verify_mail_matches_registered_email_case(
    client: AsyncClient, notifier, test_data
):
    """Request OTP with a differently cased domain

    Given an account registered as alice@x.com
    When I POST /forgotPassword/verifyMail/alice@X.COM
    Then the account is found and the OTP is mailed to the stored address
    """
    await client.post("/api/v1/auth/register", json=test_data.get("alice"))

    response = await client.post("/forgotPassword/verifyMail/alice@X.COM")

    assert response.status_code == 200
    assert notifier.sent[-1][0] == "alice@x.com"

    otp = notifier.last_otp()
    verified = await client.post(f"/forgotPassword/verifyOtp/{otp}/alice@X.COM")
    assert verified.status_code == 200


@pytest.mark.asyncio
async def test_verify_mail_unknown_email(client: AsyncClient, notifier):
    response = await client.post("/forgotPassword/verifyMail/ghost@x.com")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "ACCOUNT_NOT_FOUND"
    assert notifier.sent == []


@pytest.mark.asyncio
async def test_verify_otp_success(client: AsyncClient, notifier, test_data):
    await client.post("/api/v1/auth/register", json=test_data.get("alice"))
    await client.post("/forgotPassword/verifyMail/alice@x.com")
    otp = notifier.last_otp()

    response = await client.post(f"/forgotPassword/verifyOtp/{otp}/alice@x.com")

    assert response.status_code == 200
    assert response.json()["message"] == "OTP is verified"

    # Not consumed on success
    again = await client.post(f"/forgotPassword/verifyOtp/{otp}/alice@x.com")
    assert again.status_code == 200


@pytest.mark.asyncio
async def test_verify_otp_wrong_value(client: AsyncClient, notifier, test_data):
    await client.post("/api/v1/auth/register", json=test_data.get("alice"))
    await client.post("/forgotPassword/verifyMail/alice@x.com")
    wrong = other_otp(notifier.last_otp())

    response = await client.post(f"/forgotPassword/verifyOtp/{wrong}/alice@x.com")

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "OTP_MISMATCH"


@pytest.mark.asyncio
async def test_second_request_invalidates_first_otp(
    client: AsyncClient, notifier, db_session, test_data
):
    """Only the latest OTP matches

    Given I requested an OTP twice
    When I verify with the first OTP
    Then it no longer matches
    And the second OTP does
    """
    await client.post("/api/v1/auth/register", json=test_data.get("alice"))

    await client.post("/forgotPassword/verifyMail/alice@x.com")
    first = notifier.last_otp()
    await client.post("/forgotPassword/verifyMail/alice@x.com")
    second = notifier.last_otp()

    result = await db_session.exec(select(PasswordResetOtp))
    assert len(result.all()) == 1

    if first != second:
        stale = await client.post(f"/forgotPassword/verifyOtp/{first}/alice@x.com")
        assert stale.status_code == 400
        assert stale.json()["error"]["code"] == "OTP_MISMATCH"

    fresh = await client.post(f"/forgotPassword/verifyOtp/{second}/alice@x.com")
    assert fresh.status_code == 200


@pytest.mark.asyncio
async def test_expired_otp_is_deleted(client: AsyncClient, notifier, db_session, test_data):
    """Expired OTP

    Given my OTP has expired
    When I verify it
    Then the request fails with 417 OTP_EXPIRED and the OTP is removed
    """
    await client.post("/api/v1/auth/register", json=test_data.get("alice"))
    await client.post("/forgotPassword/verifyMail/alice@x.com")
    otp = notifier.last_otp()

    result = await db_session.exec(select(PasswordResetOtp))
    record = result.one()
    record.expires_at = datetime.utcnow() - timedelta(seconds=1)
    db_session.add(record)
    await db_session.commit()

    response = await client.post(f"/forgotPassword/verifyOtp/{otp}/alice@x.com")
    assert response.status_code == 417
    assert response.json()["error"]["code"] == "OTP_EXPIRED"

    result = await db_session.exec(select(PasswordResetOtp))
    assert result.all() == []

    again = await client.post(f"/forgotPassword/verifyOtp/{otp}/alice@x.com")
    assert again.status_code == 400


@pytest.mark.asyncio
async def test_change_password_mismatch_keeps_old_password(client: AsyncClient, test_data):
    await client.post("/api/v1/auth/register", json=test_data.get("alice"))

    response = await client.post(
        "/forgotPassword/changePassword/alice@x.com",
        json={"password": "abc", "repeat_password": "xyz"},
    )

    assert response.status_code == 417
    assert response.json()["error"]["code"] == "PASSWORD_MISMATCH"

    login = await client.post(
        "/api/v1/auth/login", json={"email": "alice@x.com", "password": "secret1"}
    )
    assert login.status_code == 200


@pytest.mark.asyncio
async def test_full_reset_flow(client: AsyncClient, notifier, test_data):
    """Forgot password end to end

    Given a registered account
    When I request an OTP, verify it and change the password
    Then I can log in with the new (trimmed) password only
    """
    await client.post("/api/v1/auth/register", json=test_data.get("alice"))
    await client.post("/forgotPassword/verifyMail/alice@x.com")
    otp = notifier.last_otp()

    verify = await client.post(f"/forgotPassword/verifyOtp/{otp}/alice@x.com")
    assert verify.status_code == 200

    change = await client.post(
        "/forgotPassword/changePassword/alice@x.com",
        json={"password": " brand-new ", "repeatPassword": "brand-new"},
    )
    assert change.status_code == 200
    assert change.json()["message"] == "Password changed successfully!"

    old_login = await client.post(
        "/api/v1/auth/login", json={"email": "alice@x.com", "password": "secret1"}
    )
    assert old_login.status_code == 401

    new_login = await client.post(
        "/api/v1/auth/login", json={"email": "alice@x.com", "password": "brand-new"}
    )
    assert new_login.status_code == 200
