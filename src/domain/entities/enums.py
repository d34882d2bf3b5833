"""
Auth Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Application-wide user role"""

    client = "CLIENT"
    admin = "ADMIN"
