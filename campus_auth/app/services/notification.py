from abc import ABC, abstractmethod


class INotificationService(ABC):
    """Outbound message capability consumed by the auth use cases"""

    @abstractmethod
    async def send(self, to: str, subject: str, html_body: str) -> None:
        """
        Deliver a message.

        Raises:
            EmailDeliveryFailed: transport rejected or could not reach the server
        """
        pass
