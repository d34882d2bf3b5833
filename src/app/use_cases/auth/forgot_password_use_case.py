"""
Forgot Password Use Case

Issues a password reset token and hands the reset link to the notification
service. Responds identically whether or not the account exists.
"""

import logging

from libs.result import Result, Return
from src.app.services.notification_service import EmailMessage, INotificationService
from src.app.services.reset_token_service import ResetTokenService
from src.app.services.settings import AuthSettings
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User
from .dtos import MessageResponse
from .validation import normalize_email

logger = logging.getLogger(__name__)

GENERIC_RESPONSE = MessageResponse(
    status="sent",
    message="If the email exists, a password reset link has been sent",
)


def build_reset_email(
    user: User, reset_link: str, expires_in_minutes: int, sender: str
) -> EmailMessage:
    name = f"{user.first_name} {user.last_name}".strip() or user.email
    body = (
        f"Hello {name},\n\n"
        "We received a request to reset your password. "
        f"Use the link below within {expires_in_minutes} minutes:\n\n"
        f"{reset_link}\n\n"
        "If you did not request a password reset, you can ignore this email.\n"
    )
    return EmailMessage(
        sender=sender, recipient=user.email, subject="Reset your password", body=body
    )


class ForgotPasswordUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - No email enumeration: same response for unknown, disabled and active
      accounts
    - Only an existing active user gets a reset token (valid 1 hour)
    - Email delivery failure is logged and does not change the response
    - Rate limiting is handled at the API layer
    """

    def __init__(
        self,
        uow: UnitOfWork,
        reset_tokens: ResetTokenService,
        notifications: INotificationService,
        settings: AuthSettings,
    ):
        self.uow = uow
        self.reset_tokens = reset_tokens
        self.notifications = notifications
        self.settings = settings

    async def execute(self, email: str) -> Result[MessageResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(normalize_email(email))

            if user is None or not user.is_active:
                return Return.ok(GENERIC_RESPONSE)

            reset_token = self.reset_tokens.issue(user)
            reset_link = (
                f"{self.settings.frontend_url.rstrip('/')}"
                f"/auth/reset-password?token={reset_token}"
            )
            message = build_reset_email(
                user,
                reset_link,
                int(self.settings.reset_token_ttl.total_seconds() // 60),
                self.settings.from_email,
            )
            user_id = user.id

        try:
            await self.notifications.send(message)
            logger.info(f"Password reset email sent for user {user_id}")
        except Exception:
            logger.exception(f"Failed to send password reset email for user {user_id}")

        return Return.ok(GENERIC_RESPONSE)
