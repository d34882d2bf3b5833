"""
Refresh Token Use Case

Handles JWT token refresh with refresh token rotation for security.
"""

import logging

from libs.result import Error, Result, Return
from src.app.services.token_issuer import TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from .dtos import RefreshContext
from .register_dto import AuthResponse
from .session_support import build_auth_response, start_session

logger = logging.getLogger(__name__)

REFRESH_ERROR = Error(
    "REFRESH_TOKEN_ERROR", "Unable to refresh session, please log in again"
)


class RefreshTokenUseCase:
    """
    Use case for rotating a refresh token into a new token pair.

    Business Rules:
    - Precondition: RefreshContext already verified (VerifyRefreshTokenUseCase)
    - Rotation: the presented token is revoked with a conditional update in
      the same transaction that persists the replacement session
    - If the revoke does not take (already rotated by a concurrent request,
      or storage failure) nothing is issued and REFRESH_TOKEN_ERROR is
      returned; the client must log in again
    - New session gets a fresh expiry; the old expiry is not carried over
    """

    def __init__(self, uow: UnitOfWork, token_issuer: TokenIssuer):
        self.uow = uow
        self.token_issuer = token_issuer

    async def execute(self, context: RefreshContext) -> Result[AuthResponse]:
        """
        Execute refresh token use case.

        Args:
            context: Verified refresh request

        Returns:
            Result with AuthResponse containing the new pair, or Error
        """
        async with self.uow:
            try:
                revoked = await self.uow.sessions.revoke_by_token(context.refresh_token)
            except Exception:
                logger.exception(f"Failed to revoke refresh token for user {context.user_id}")
                return Return.err(REFRESH_ERROR)

            if not revoked:
                logger.warning(
                    f"Refresh token for user {context.user_id} was already rotated or revoked"
                )
                return Return.err(REFRESH_ERROR)

            user = await self.uow.users.get_by_id(context.user_id)
            if user is None or not user.is_active:
                return Return.err(Error("USER_INACTIVE", "User not found or inactive"))

            pair = await start_session(self.uow, self.token_issuer, user)

            await self.uow.commit()

            logger.info(f"Tokens rotated for user {user.id}")
            return Return.ok(build_auth_response(user, pair))
