"""
RefreshToken Entity

Long-lived opaque credential exchanged for new access tokens.
"""

from uuid import UUID, uuid4

from sqlmodel import Field, Index, SQLModel


class RefreshToken(SQLModel, table=True):
    """
    RefreshToken entity - one per account.

    Business Rules:
    - At most one record per account (unique account_id)
    - Created lazily on first register/login, then reused as-is
    - Never rotated or extended
    - Deleted when a refresh attempt finds it expired
    - expires_at is stored as epoch seconds
    """

    __tablename__ = "refresh_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    token: str = Field(unique=True, index=True, max_length=500)
    expires_at: int = Field(nullable=False)

    account_id: UUID = Field(foreign_key="accounts.id", unique=True, nullable=False)

    __table_args__ = (Index("idx_refresh_token_expires_at", "expires_at"),)
