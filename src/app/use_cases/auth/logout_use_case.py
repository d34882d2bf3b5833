"""
Logout Use Case

Best-effort session cleanup. Always succeeds from the client's point of view:
a client whose local token ends up revoked is in a safe state either way.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import LogoutResponse

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for logging out.

    Business Rules:
    - Revoke the presented refresh token, if any (unknown token is a no-op)
    - Independently revoke every session of the user known from the access
      token, if any
    - Each step runs in its own transaction; a failure in one is logged and
      does not prevent the other
    - Always returns success, also with no token and no user
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, refresh_token: Optional[str] = None, user_id: Optional[UUID] = None
    ) -> Result[LogoutResponse]:
        sessions_revoked = 0

        if refresh_token:
            try:
                async with self.uow:
                    if await self.uow.sessions.revoke_by_token(refresh_token):
                        sessions_revoked += 1
                    await self.uow.commit()
            except Exception:
                logger.exception(f"Logout: failed to revoke presented refresh token (user {user_id})")

        if user_id is not None:
            try:
                async with self.uow:
                    sessions_revoked += await self.uow.sessions.revoke_all_by_user_id(user_id)
                    await self.uow.commit()
            except Exception:
                logger.exception(f"Logout: failed to revoke sessions for user {user_id}")

        logger.info(
            f"Logout for user {user_id or 'unknown'}: {sessions_revoked} session(s) revoked"
        )
        return Return.ok(
            LogoutResponse(message="Logged out successfully", sessions_revoked=sessions_revoked)
        )
