from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import RefreshSession


class ISessionRepository(ABC):
    """
    Refresh session store interface - application layer

    Lookups treat revoked and expired sessions as not found.
    """

    @abstractmethod
    async def create(self, session: RefreshSession) -> RefreshSession:
        """Persist a new session. Duplicate token hashes are an integrity error."""
        pass

    @abstractmethod
    async def find_by_token(self, refresh_token: str) -> Optional[RefreshSession]:
        """Find the live session for a refresh token"""
        pass

    @abstractmethod
    async def is_valid(self, refresh_token: str) -> bool:
        """True only if the session exists, is not revoked and has not expired"""
        pass

    @abstractmethod
    async def revoke_by_token(self, refresh_token: str) -> bool:
        """
        Revoke the live session for a refresh token.

        Returns True if this call revoked it; False if the token is unknown,
        expired, or was already revoked (e.g. by a concurrent rotation).
        """
        pass

    @abstractmethod
    async def revoke_all_by_user_id(self, user_id: UUID) -> int:
        """Revoke all sessions for a user. Returns count of revoked sessions."""
        pass

    @abstractmethod
    async def get_active_by_user_id(self, user_id: UUID) -> List[RefreshSession]:
        """Get all live sessions (one per device) for a user"""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Physically delete sessions past expiry. Returns count deleted."""
        pass
