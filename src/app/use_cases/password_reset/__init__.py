"""
Password Reset Use Cases

Forgotten password flow: request OTP, verify OTP, change password.
"""

from .request_password_reset_use_case import RequestPasswordResetUseCase
from .verify_otp_use_case import VerifyOtpUseCase
from .change_password_use_case import ChangePasswordUseCase
from .dtos import MessageResponse

__all__ = [
    "RequestPasswordResetUseCase",
    "VerifyOtpUseCase",
    "ChangePasswordUseCase",
    "MessageResponse",
]
