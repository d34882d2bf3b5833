"""Admin use cases for system administration operations."""

from .cleanup_expired_sessions_use_case import (
    CleanupExpiredSessionsResponse,
    CleanupExpiredSessionsUseCase,
)

__all__ = [
    "CleanupExpiredSessionsUseCase",
    "CleanupExpiredSessionsResponse",
]
