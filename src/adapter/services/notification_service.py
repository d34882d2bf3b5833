import logging

from src.app.services.notification_service import EmailMessage, INotificationService

logger = logging.getLogger(__name__)


class LoggingNotificationService(INotificationService):
    """
    Notification adapter that records outgoing mail in the application log.

    Stands in for a real mail provider in development; the message body is
    not logged since it carries a live reset link.
    """

    async def send(self, message: EmailMessage) -> None:
        logger.info(
            f"Email queued from {message.sender} to {message.recipient}: {message.subject}"
        )
