"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    """

    name: str
    email: str
    username: str
    password: str


# ============================================================================
# Response DTOs
# ============================================================================


class AuthResponse(BaseModel):
    """Token pair returned by register, login and refresh; camelCase on the wire"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    access_token: str
    refresh_token: str


class Principal(BaseModel):
    """Identity established for one request by the authenticator"""

    account_id: str
    name: str
    username: str
    email: str
    role: str


class AccountResponse(BaseModel):
    """Current account as shown by GET /me"""

    id: str
    name: str
    username: str
    email: str
    role: str
