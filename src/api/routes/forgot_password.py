from fastapi import APIRouter, Depends, status
from pydantic import (
    AliasChoices,
    BaseModel,
    EmailStr,
    Field,
    TypeAdapter,
    ValidationError,
)

from src.api.error import ClientError, ServerError
from src.app.services.notifier import INotifier
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.password_reset import (
    ChangePasswordUseCase,
    MessageResponse,
    RequestPasswordResetUseCase,
    VerifyOtpUseCase,
)
from config import ApplicationConfig
from src.depends import get_notifier, get_password_hasher, get_unit_of_work

router = APIRouter(prefix="/forgotPassword", tags=["Password Reset"])

email_adapter = TypeAdapter(EmailStr)


def normalize_email(email: str) -> str:
    """Same normalisation registration applies; anything unparseable is looked up as given"""
    try:
        return email_adapter.validate_python(email)
    except ValidationError:
        return email


@router.post(
    "/verifyMail/{email}", status_code=status.HTTP_200_OK, response_model=MessageResponse
)
async def verify_mail(
    email: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotifier = Depends(get_notifier),
):
    """
    Send a password reset OTP to the account's email.

    Raises:
        - 404 Not Found: No account with this email
        - 500 Internal Server Error: Server error
    """
    use_case = RequestPasswordResetUseCase(
        uow, notifier, ttl_seconds=ApplicationConfig.OTP_TTL_SECONDS
    )
    result = await use_case.execute(normalize_email(email))

    if result.is_err():
        error = result.error
        if error.code == "ACCOUNT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/verifyOtp/{otp}/{email}", status_code=status.HTTP_200_OK, response_model=MessageResponse
)
async def verify_otp(
    otp: int,
    email: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Check a password reset OTP.

    Raises:
        - 400 Bad Request: OTP does not match
        - 404 Not Found: No account with this email
        - 417 Expectation Failed: OTP has expired (the OTP is removed)
        - 500 Internal Server Error: Server error
    """
    use_case = VerifyOtpUseCase(uow)
    result = await use_case.execute(normalize_email(email), otp)

    if result.is_err():
        error = result.error
        if error.code == "ACCOUNT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "OTP_MISMATCH":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "OTP_EXPIRED":
            raise ClientError(error, status_code=status.HTTP_417_EXPECTATION_FAILED)
        raise ServerError(error)

    return result.value


class ChangePasswordRequest(BaseModel):
    """New password, typed twice"""

    password: str = Field(..., min_length=1, description="New password")
    repeat_password: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("repeatPassword", "repeat_password"),
        description="New password again",
    )


@router.post(
    "/changePassword/{email}", status_code=status.HTTP_200_OK, response_model=MessageResponse
)
async def change_password(
    email: str,
    request: ChangePasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
):
    """
    Set a new password for the account.

    Raises:
        - 404 Not Found: No account with this email
        - 417 Expectation Failed: The two passwords differ
        - 500 Internal Server Error: Server error
    """
    use_case = ChangePasswordUseCase(uow, password_hasher)
    result = await use_case.execute(
        normalize_email(email), request.password, request.repeat_password
    )

    if result.is_err():
        error = result.error
        if error.code == "ACCOUNT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "PASSWORD_MISMATCH":
            raise ClientError(error, status_code=status.HTTP_417_EXPECTATION_FAILED)
        raise ServerError(error)

    return result.value
