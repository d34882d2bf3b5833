from abc import ABC, abstractmethod

from pydantic import BaseModel


class EmailMessage(BaseModel):
    """Templated payload handed to the notification collaborator"""

    sender: str
    recipient: str
    subject: str
    body: str


class INotificationService(ABC):
    """Notification service interface - application layer"""

    @abstractmethod
    async def send(self, message: EmailMessage) -> None:
        """Deliver a message; raises on delivery failure"""
        pass
