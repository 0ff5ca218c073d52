"""
Account Entity

Represents a person who can sign in to the movie catalog.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from .enums import AccountRole


class Account(SQLModel, table=True):
    """
    Account entity - the identity every auth flow is keyed on.

    Business Rules:
    - Email is the identity key and must be unique
    - Login handle (username) must be unique
    - Password stored as bcrypt hash
    - Role is set to USER at registration and never changed by the API
    - Capability flags are inspected by the login policy
    """

    __tablename__ = "accounts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    display_name: str = Field(max_length=255)
    login_handle: str = Field(unique=True, index=True, max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    role: AccountRole = Field(default=AccountRole.USER)

    enabled: bool = Field(default=True)
    account_non_expired: bool = Field(default=True)
    account_non_locked: bool = Field(default=True)
    credentials_non_expired: bool = Field(default=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
