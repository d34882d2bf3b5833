import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import LogoutResponse

logger = logging.getLogger(__name__)


class LogoutAllDevicesUseCase:
    """Revokes every refresh session of the authenticated user."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: Optional[UUID]) -> Result[LogoutResponse]:
        if user_id is None:
            return Return.err(Error("NOT_AUTHENTICATED", "Not authenticated"))

        async with self.uow:
            count = await self.uow.sessions.revoke_all_by_user_id(user_id)
            await self.uow.commit()

        logger.info(f"Logged out user {user_id} from all devices ({count} session(s))")
        return Return.ok(
            LogoutResponse(message="Logged out from all devices", sessions_revoked=count)
        )
