from typing import Optional

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.local_poster_store import LocalPosterStore
from src.adapter.services.smtp_notifier import SmtpNotifier
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.services.notifier import INotifier
from src.app.services.password_hasher import PasswordHasher
from src.app.services.poster_store import IPosterStore
from src.app.services.refresh_token_service import RefreshTokenService
from src.app.services.token_signer import TokenSigner
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import AuthenticateRequestUseCase, Principal
from src.domain.entities import AccountRole
from src.domain.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# auto_error=False: a missing or non-Bearer header means "unauthenticated", not 403
security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=ApplicationConfig.BCRYPT_ROUNDS)


def get_token_signer() -> TokenSigner:
    return TokenSigner(
        ApplicationConfig.JWT_SECRET,
        ttl_seconds=ApplicationConfig.ACCESS_TOKEN_TTL_SECONDS,
    )


def get_refresh_token_service(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> RefreshTokenService:
    return RefreshTokenService(uow, ttl_seconds=ApplicationConfig.REFRESH_TOKEN_TTL_SECONDS)


def get_notifier() -> INotifier:
    return SmtpNotifier(
        smtp_host=ApplicationConfig.SMTP_HOST,
        smtp_port=ApplicationConfig.SMTP_PORT,
        smtp_user=ApplicationConfig.SMTP_USER,
        smtp_password=ApplicationConfig.SMTP_PASSWORD,
        smtp_use_tls=ApplicationConfig.SMTP_USE_TLS,
        from_email=ApplicationConfig.MAIL_FROM,
    )


def get_poster_store() -> IPosterStore:
    return LocalPosterStore(ApplicationConfig.POSTER_DIR)


async def get_current_principal(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_signer: TokenSigner = Depends(get_token_signer),
) -> Optional[Principal]:
    """
    Establish the caller's identity from the bearer token, once per request.

    Never rejects: any failure leaves the request unauthenticated (None) and
    the authorization dependencies below decide.
    """
    if hasattr(request.state, "principal"):
        return request.state.principal

    token = credentials.credentials if credentials else None
    result = await AuthenticateRequestUseCase(uow, token_signer).execute(token)

    request.state.principal = result.value if result.is_ok() else None
    return request.state.principal


async def get_current_account(
    principal: Optional[Principal] = Depends(get_current_principal),
) -> Principal:
    """
    Dependency requiring an authenticated caller.

    Raises:
        ClientError: 401 if the request is unauthenticated
    """
    if principal is None:
        raise ClientError(
            Error("UNAUTHORIZED", "Authentication required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return principal


async def require_admin(
    principal: Principal = Depends(get_current_account),
) -> Principal:
    """
    Dependency requiring an authenticated ADMIN caller.

    Raises:
        ClientError: 403 if the caller's role is not ADMIN
    """
    if principal.role != AccountRole.ADMIN.value:
        raise ClientError(
            Error("FORBIDDEN", "Admin role required"),
            status_code=status.HTTP_403_FORBIDDEN,
        )
    return principal
