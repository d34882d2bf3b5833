"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from dataclasses import dataclass
from uuid import UUID

from pydantic import BaseModel


# ============================================================================
# Capability DTOs
# ============================================================================


@dataclass(frozen=True)
class RefreshContext:
    """
    Already-verified refresh request.

    Produced by VerifyRefreshTokenUseCase (signature, expiry, live session,
    active user) and consumed by RefreshTokenUseCase.
    """

    user_id: UUID
    email: str
    role: str
    refresh_token: str


# ============================================================================
# Response DTOs
# ============================================================================


class MessageResponse(BaseModel):
    """Generic status/message response"""

    status: str
    message: str


class LogoutResponse(BaseModel):
    """Response for logout and logout-all-devices use cases"""

    message: str
    sessions_revoked: int = 0


class ChangePasswordResponse(BaseModel):
    """Response for change password use case"""

    message: str
    requires_login: bool
    sessions_revoked: int
