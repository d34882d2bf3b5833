"""
Change Password Use Case

Authenticated password change. Revokes every session of the user.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ChangePasswordResponse
from .validation import validate_password

logger = logging.getLogger(__name__)


class ChangePasswordUseCase:
    """
    Use case for changing the password of the authenticated user.

    Business Rules:
    - Current password must verify (CURRENT_PASSWORD_INVALID)
    - New password must meet complexity requirements (VALIDATION_ERROR)
    - New hash stored and all sessions revoked in one transaction,
      forcing re-login on every device
    """

    def __init__(self, uow: UnitOfWork, password_hasher: PasswordHasher):
        self.uow = uow
        self.password_hasher = password_hasher

    async def execute(
        self, user_id: Optional[UUID], current_password: str, new_password: str
    ) -> Result[ChangePasswordResponse]:
        """
        Execute change password use case.

        Args:
            user_id: Authenticated user (from access token)
            current_password: Password the user believes is current
            new_password: Replacement password

        Returns:
            Result with ChangePasswordResponse, or Error
        """
        if user_id is None:
            return Return.err(Error("NOT_AUTHENTICATED", "Not authenticated"))

        validation = validate_password(new_password)
        if validation.is_err():
            return Return.err(validation.error)

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if not self.password_hasher.verify(current_password, user.password_hash):
                return Return.err(
                    Error("CURRENT_PASSWORD_INVALID", "Current password is incorrect")
                )

            user.password_hash = self.password_hasher.hash(new_password)
            await self.uow.users.update(user)

            revoked_count = await self.uow.sessions.revoke_all_by_user_id(user.id)

            await self.uow.commit()

        logger.info(f"Password changed for user {user_id}, {revoked_count} session(s) revoked")
        return Return.ok(
            ChangePasswordResponse(
                message="Password updated successfully. Please log in again.",
                requires_login=True,
                sessions_revoked=revoked_count,
            )
        )
