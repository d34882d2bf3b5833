"""
RefreshSession Entity

One logged-in device or browser, identified by its refresh token.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class RefreshSession(SQLModel, table=True):
    """
    RefreshSession entity - persisted refresh token for one device.

    Business Rules:
    - Only the SHA-256 hash of the refresh token is stored
    - A refresh token is redeemable once; rotation revokes it (UC refresh)
    - expires_at is fixed at creation, never extended by use
    - Expired or revoked sessions behave as not found
    - Password change/reset and logout-all revoke every session of the user
    """

    __tablename__ = "refresh_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    token_hash: str = Field(unique=True, index=True, max_length=64)  # SHA-256 hex
    revoked: bool = Field(default=False)
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_refresh_session_expires_at", "expires_at"),
        Index("idx_refresh_session_user_revoked", "user_id", "revoked"),
    )
