"""
Verify Refresh Token Use Case

Turns a raw refresh token into an already-verified RefreshContext.
This is the precondition check that runs before RefreshTokenUseCase.
"""

from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.token_issuer import TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import UserRole
from .dtos import RefreshContext


class VerifyRefreshTokenUseCase:
    """
    Use case for validating a presented refresh token.

    Business Rules:
    - Token must be present (REFRESH_TOKEN_REQUIRED)
    - Signature, type and expiry verified (TOKEN_INVALID / TOKEN_EXPIRED)
    - A live session must exist for the token (revoked, rotated and expired
      sessions are TOKEN_INVALID)
    - Owning user must exist and be active (USER_INACTIVE)
    """

    def __init__(self, uow: UnitOfWork, token_issuer: TokenIssuer):
        self.uow = uow
        self.token_issuer = token_issuer

    async def execute(self, refresh_token: Optional[str]) -> Result[RefreshContext]:
        if not refresh_token:
            return Return.err(
                Error("REFRESH_TOKEN_REQUIRED", "Refresh token required")
            )

        claims_result = self.token_issuer.verify_refresh_token(refresh_token)
        if claims_result.is_err():
            return Return.err(claims_result.error)
        claims = claims_result.value

        async with self.uow:
            session = await self.uow.sessions.find_by_token(refresh_token)
            if session is None or session.user_id != claims.user_id:
                return Return.err(
                    Error("TOKEN_INVALID", "Refresh token is invalid or has been revoked")
                )

            user = await self.uow.users.get_by_id(claims.user_id)
            if user is None or not user.is_active:
                return Return.err(
                    Error("USER_INACTIVE", "User not found or inactive")
                )

            return Return.ok(
                RefreshContext(
                    user_id=user.id,
                    email=user.email,
                    role=UserRole(user.role).value,
                    refresh_token=refresh_token,
                )
            )
