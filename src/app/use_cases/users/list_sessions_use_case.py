"""
List Sessions Use Case

Lists the live refresh sessions (devices) of the authenticated user.
"""

from datetime import datetime
from typing import List
from uuid import UUID

from pydantic import BaseModel

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork


class SessionInfo(BaseModel):
    """One logged-in device; the token itself is never exposed"""

    id: str
    created_at: datetime
    expires_at: datetime


class ListSessionsResponse(BaseModel):
    sessions: List[SessionInfo]


class ListSessionsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[ListSessionsResponse]:
        async with self.uow:
            sessions = await self.uow.sessions.get_active_by_user_id(user_id)
            return Return.ok(
                ListSessionsResponse(
                    sessions=[
                        SessionInfo(
                            id=str(s.id),
                            created_at=s.created_at,
                            expires_at=s.expires_at,
                        )
                        for s in sessions
                    ]
                )
            )
