"""
Movie API Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class AccountRole(str, Enum):
    """Role granted to an account. Fixed at registration."""

    USER = "USER"
    ADMIN = "ADMIN"
