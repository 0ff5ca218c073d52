from fastapi import APIRouter, Depends, status
from pydantic import AliasChoices, BaseModel, EmailStr, Field

from src.api.error import ClientError, ServerError
from src.app.services.password_hasher import PasswordHasher
from src.app.services.refresh_token_service import RefreshTokenService
from src.app.services.token_signer import TokenSigner
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    AuthResponse,
    LoginUseCase,
    RefreshTokenUseCase,
    RegisterCommand,
    RegisterUseCase,
)
from src.depends import (
    get_password_hasher,
    get_refresh_token_service,
    get_token_signer,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])

ACCOUNT_STATE_ERRORS = (
    "ACCOUNT_LOCKED",
    "ACCOUNT_DISABLED",
    "ACCOUNT_EXPIRED",
    "CREDENTIALS_EXPIRED",
)


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    """

    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    email: EmailStr = Field(..., description="Account email address")
    username: str = Field(..., min_length=1, max_length=255, description="Login handle")
    password: str = Field(..., min_length=1, description="Account password")


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=AuthResponse
)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    token_signer: TokenSigner = Depends(get_token_signer),
    refresh_tokens: RefreshTokenService = Depends(get_refresh_token_service),
):
    """
    Register a new USER account.

    Returns an access token and the account's refresh token.

    Raises:
        - 409 Conflict: Email or username already taken
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
        - 500 Internal Server Error: Server error
    """
    command = RegisterCommand(
        name=request.name,
        email=request.email,
        username=request.username,
        password=request.password,
    )

    use_case = RegisterUseCase(uow, password_hasher, token_signer, refresh_tokens)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "ACCOUNT_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(..., description="Account password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    token_signer: TokenSigner = Depends(get_token_signer),
    refresh_tokens: RefreshTokenService = Depends(get_refresh_token_service),
):
    """
    Authenticate with email and password.

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 403 Forbidden: Account locked, disabled or expired, or credentials expired
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow, password_hasher, token_signer, refresh_tokens)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code in ACCOUNT_STATE_ERRORS:
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


class RefreshRequest(BaseModel):
    """Refresh token HTTP request payload"""

    refresh_token: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("refreshToken", "refresh_token"),
        description="Refresh token",
    )


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def refresh(
    request: RefreshRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_signer: TokenSigner = Depends(get_token_signer),
    refresh_tokens: RefreshTokenService = Depends(get_refresh_token_service),
):
    """
    Exchange a refresh token for a new access token.

    The refresh token itself is returned unchanged.

    Raises:
        - 401 Unauthorized: Refresh token unknown or expired
        - 500 Internal Server Error: Server error
    """
    use_case = RefreshTokenUseCase(uow, token_signer, refresh_tokens)
    result = await use_case.execute(request.refresh_token)

    if result.is_err():
        error = result.error
        if error.code in ("TOKEN_NOT_FOUND", "TOKEN_EXPIRED"):
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value
