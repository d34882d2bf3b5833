from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlmodel import delete, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_repository import ISessionRepository
from src.app.services.token_issuer import hash_refresh_token
from src.domain.base import utcnow
from src.domain.entities import RefreshSession


class SessionRepository(ISessionRepository):
    """
    Refresh session store implementation using SQLModel

    Sessions are keyed by the SHA-256 hash of the refresh token, so lookups
    are a single indexed query. Revocation is a conditional UPDATE; only one
    of several concurrent revocations of the same token sees rowcount == 1.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, session_obj: RefreshSession) -> RefreshSession:
        """Persist a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def find_by_token(self, refresh_token: str) -> Optional[RefreshSession]:
        """Find the live session for a refresh token"""
        stmt = select(RefreshSession).where(
            RefreshSession.token_hash == hash_refresh_token(refresh_token),
            RefreshSession.revoked == False,  # noqa: E712
            RefreshSession.expires_at > utcnow(),
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def is_valid(self, refresh_token: str) -> bool:
        """True only for an existing, non-revoked, unexpired session"""
        return await self.find_by_token(refresh_token) is not None

    async def revoke_by_token(self, refresh_token: str) -> bool:
        """Revoke the live session for a refresh token"""
        now = utcnow()
        stmt = (
            update(RefreshSession)
            .where(
                RefreshSession.token_hash == hash_refresh_token(refresh_token),
                RefreshSession.revoked == False,  # noqa: E712
                RefreshSession.expires_at > now,
            )
            .values(revoked=True, revoked_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def revoke_all_by_user_id(self, user_id: UUID) -> int:
        """Revoke all active sessions for a user"""
        stmt = (
            update(RefreshSession)
            .where(
                RefreshSession.user_id == user_id,
                RefreshSession.revoked == False,  # noqa: E712
            )
            .values(revoked=True, revoked_at=utcnow())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def get_active_by_user_id(self, user_id: UUID) -> List[RefreshSession]:
        """Get all live sessions for a user, newest first"""
        stmt = (
            select(RefreshSession)
            .where(
                RefreshSession.user_id == user_id,
                RefreshSession.revoked == False,  # noqa: E712
                RefreshSession.expires_at > utcnow(),
            )
            .order_by(RefreshSession.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def delete_expired(self, now: datetime) -> int:
        """Delete sessions whose expiry has passed"""
        stmt = delete(RefreshSession).where(RefreshSession.expires_at <= now)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
