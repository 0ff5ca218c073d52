"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .authenticate_request_use_case import AuthenticateRequestUseCase
from .dtos import (
    RegisterCommand,
    AuthResponse,
    Principal,
    AccountResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "AuthenticateRequestUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "AuthResponse",
    "Principal",
    "AccountResponse",
]
