"""
Use Case: Cleanup Expired Sessions

Periodic sweep that physically deletes refresh sessions past their expiry.
Correctness never depends on it: expired sessions already behave as not found.
"""

import logging
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow

logger = logging.getLogger(__name__)


class CleanupExpiredSessionsResponse(BaseModel):
    """Response DTO for CleanupExpiredSessionsUseCase"""

    status: str
    sessions_deleted: int


class CleanupExpiredSessionsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, now: Optional[datetime] = None
    ) -> Result[CleanupExpiredSessionsResponse]:
        async with self.uow:
            deleted = await self.uow.sessions.delete_expired(now or utcnow())
            await self.uow.commit()

        logger.info(f"Cleaned up {deleted} expired session(s)")
        return Return.ok(
            CleanupExpiredSessionsResponse(status="completed", sessions_deleted=deleted)
        )
