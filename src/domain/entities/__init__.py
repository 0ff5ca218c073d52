"""
Movie API Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

from .enums import AccountRole

from .account import Account
from .refresh_token import RefreshToken
from .password_reset_otp import PasswordResetOtp
from .movie import Movie

__all__ = [
    # Enums
    "AccountRole",
    # Entities
    "Account",
    "RefreshToken",
    "PasswordResetOtp",
    "Movie",
]
