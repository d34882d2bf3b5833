"""
User Use Cases

Self-service reads for the authenticated user.
"""

from .get_profile_use_case import GetProfileUseCase
from .list_sessions_use_case import ListSessionsResponse, ListSessionsUseCase, SessionInfo

__all__ = [
    "GetProfileUseCase",
    "ListSessionsUseCase",
    "ListSessionsResponse",
    "SessionInfo",
]
