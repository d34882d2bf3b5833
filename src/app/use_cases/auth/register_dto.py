"""
Register Use Case DTOs (Data Transfer Objects)

Command/Response pattern for clean architecture separation:
- RegisterCommand: Input to use case (validated business intent)
- AuthResponse: Output shared by register, login and refresh
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import User, UserRole


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    Contains only business-relevant data (no HTTP concerns).
    """

    email: str
    password: str
    first_name: str
    last_name: str
    phone: Optional[str] = None


class UserInfo(BaseModel):
    """User view model - never carries the password hash"""

    id: str
    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    role: str
    is_active: bool
    last_login_at: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            phone=user.phone,
            role=UserRole(user.role).value,
            is_active=user.is_active,
            last_login_at=user.last_login_at,
            created_at=user.created_at,
        )


class TokenInfo(BaseModel):
    """Expiry of the issued token pair"""

    access_token_expires_at: datetime
    refresh_token_expires_at: datetime


class AuthResponse(BaseModel):
    """
    Auth response - structured output from register/login/refresh

    refresh_token is delivered out of band (HTTP-only cookie) by the API layer.
    """

    user: UserInfo
    access_token: str
    refresh_token: str
    token_info: TokenInfo
