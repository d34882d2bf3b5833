"""
Reset Password Use Case

Handles password reset confirmation with a signed reset token.
"""

import logging

from libs.result import Error, Result, Return
from src.app.services.password_hasher import PasswordHasher
from src.app.services.reset_token_service import ResetTokenService
from src.app.services.unit_of_work import UnitOfWork
from .dtos import MessageResponse
from .validation import validate_password

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    """
    Use case for confirming a password reset.

    Business Rules:
    - Token signature, purpose and expiry are verified
      (TOKEN_INVALID / TOKEN_EXPIRED)
    - User is re-checked: must still exist and be active (USER_NOT_FOUND)
    - Token is bound to the password hash at issuance, so it cannot be
      redeemed again once the password has changed (TOKEN_INVALID)
    - New password must meet complexity requirements (VALIDATION_ERROR)
    - New hash stored and all sessions revoked in one transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        password_hasher: PasswordHasher,
        reset_tokens: ResetTokenService,
    ):
        self.uow = uow
        self.password_hasher = password_hasher
        self.reset_tokens = reset_tokens

    async def execute(self, token: str, new_password: str) -> Result[MessageResponse]:
        """
        Execute reset password use case.

        Args:
            token: Password reset token (from the emailed link)
            new_password: New password to set

        Returns:
            Result with confirmation status, or Error
        """
        validation = validate_password(new_password)
        if validation.is_err():
            return Return.err(validation.error)

        claims_result = self.reset_tokens.verify(token)
        if claims_result.is_err():
            return Return.err(claims_result.error)
        claims = claims_result.value

        async with self.uow:
            user = await self.uow.users.get_by_id(claims.user_id)
            if user is None or not user.is_active:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if not self.reset_tokens.matches_user(claims, user):
                return Return.err(
                    Error("TOKEN_INVALID", "Password reset token has already been used")
                )

            user.password_hash = self.password_hasher.hash(new_password)
            await self.uow.users.update(user)

            revoked_count = await self.uow.sessions.revoke_all_by_user_id(user.id)

            await self.uow.commit()

        logger.info(
            f"Password reset for user {claims.user_id}, {revoked_count} session(s) revoked"
        )
        return Return.ok(
            MessageResponse(
                status="success",
                message="Password has been reset successfully",
            )
        )
