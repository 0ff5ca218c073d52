"""
PasswordResetOtp Entity

One-time numeric code e-mailed for a forgotten password.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel


class PasswordResetOtp(SQLModel, table=True):
    """
    PasswordResetOtp entity - one per account.

    Business Rules:
    - 6-digit code in [100000, 999999]
    - Expires 70 seconds after issue (configurable)
    - A new request overwrites code and expiry in place
    - Deleted when verification finds it expired, not when it is used
    """

    __tablename__ = "password_reset_otps"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    otp: int = Field(nullable=False)
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    account_id: UUID = Field(foreign_key="accounts.id", unique=True, nullable=False)
