"""
Login Use Case

Handles user authentication and issues a new device session.
"""

import logging

from libs.result import Error, Result, Return
from src.app.services.password_hasher import PasswordHasher
from src.app.services.token_issuer import TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .register_dto import AuthResponse
from .session_support import build_auth_response, start_session
from .validation import normalize_email

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login and token issuance.

    Business Rules:
    - Unknown email and wrong password yield the same INVALID_CREDENTIALS error
    - Constant-time password comparison; a dummy hash check runs for unknown
      emails so timing does not reveal account existence
    - User must be active (ACCOUNT_DISABLED), checked after the password
    - Creates new session with refresh token (one per device)
    - Updates user.last_login_at
    """

    def __init__(
        self,
        uow: UnitOfWork,
        password_hasher: PasswordHasher,
        token_issuer: TokenIssuer,
    ):
        self.uow = uow
        self.password_hasher = password_hasher
        self.token_issuer = token_issuer

    async def execute(self, email: str, password: str) -> Result[AuthResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with AuthResponse containing user and tokens, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(normalize_email(email))

            if user is None:
                self.password_hasher.dummy_verify(password)
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if not self.password_hasher.verify(password, user.password_hash):
                logger.info(f"Login failed for user {user.id}: wrong password")
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if not user.is_active:
                return Return.err(
                    Error("ACCOUNT_DISABLED", "User account is disabled")
                )

            user.last_login_at = utcnow()
            await self.uow.users.update(user)

            pair = await start_session(self.uow, self.token_issuer, user)

            await self.uow.commit()

            logger.info(f"User logged in: {user.id}")
            return Return.ok(build_auth_response(user, pair))
