from abc import ABC, abstractmethod


class MailDeliveryError(Exception):
    """The mail transport refused or failed to deliver a message"""


class IMailer(ABC):
    """Outbound email collaborator"""

    @abstractmethod
    async def send_password_reset(self, *, to_email: str, reset_link: str, expires_minutes: int) -> None:
        """Deliver a password reset link; raises MailDeliveryError on failure"""
        pass
