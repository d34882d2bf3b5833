"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .register_dto import AuthResponse, RegisterCommand, TokenInfo, UserInfo
from .login_use_case import LoginUseCase
from .verify_refresh_token_use_case import VerifyRefreshTokenUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .logout_use_case import LogoutUseCase
from .logout_all_devices_use_case import LogoutAllDevicesUseCase
from .change_password_use_case import ChangePasswordUseCase
from .forgot_password_use_case import ForgotPasswordUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .dtos import (
    ChangePasswordResponse,
    LogoutResponse,
    MessageResponse,
    RefreshContext,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "VerifyRefreshTokenUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "LogoutAllDevicesUseCase",
    "ChangePasswordUseCase",
    "ForgotPasswordUseCase",
    "ResetPasswordUseCase",
    # DTOs - Commands
    "RegisterCommand",
    "RefreshContext",
    # DTOs - Responses
    "AuthResponse",
    "MessageResponse",
    "LogoutResponse",
    "ChangePasswordResponse",
    # DTOs - Nested Models
    "UserInfo",
    "TokenInfo",
]
