"""
Use Cases

Organized into domain folders:
- auth/: Authentication and session lifecycle flows
- users/: Self-service reads for the authenticated user
- admin/: System maintenance operations
"""

from .auth import (
    RegisterUseCase,
    LoginUseCase,
    VerifyRefreshTokenUseCase,
    RefreshTokenUseCase,
    LogoutUseCase,
    LogoutAllDevicesUseCase,
    ChangePasswordUseCase,
    ForgotPasswordUseCase,
    ResetPasswordUseCase,
)
from .users import GetProfileUseCase, ListSessionsUseCase
from .admin import CleanupExpiredSessionsUseCase

__all__ = [
    # Auth
    "RegisterUseCase",
    "LoginUseCase",
    "VerifyRefreshTokenUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "LogoutAllDevicesUseCase",
    "ChangePasswordUseCase",
    "ForgotPasswordUseCase",
    "ResetPasswordUseCase",
    # Users
    "GetProfileUseCase",
    "ListSessionsUseCase",
    # Admin
    "CleanupExpiredSessionsUseCase",
]
