"""
Use Cases

Organized into domain folders:
- auth/: Registration, login, token refresh, request authentication
- password_reset/: Forgotten password OTP flow
- movies/: Movie catalog

Import from subdirectories for better organization.
"""

from .auth import (
    RegisterUseCase,
    RegisterCommand,
    LoginUseCase,
    RefreshTokenUseCase,
    AuthenticateRequestUseCase,
)
from .password_reset import (
    RequestPasswordResetUseCase,
    VerifyOtpUseCase,
    ChangePasswordUseCase,
)
from .movies import (
    MovieCatalogUseCase,
)

__all__ = [
    # Auth
    "RegisterUseCase",
    "RegisterCommand",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "AuthenticateRequestUseCase",
    # Password reset
    "RequestPasswordResetUseCase",
    "VerifyOtpUseCase",
    "ChangePasswordUseCase",
    # Movies
    "MovieCatalogUseCase",
]
