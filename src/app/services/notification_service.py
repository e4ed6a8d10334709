"""Notification Service Interface

Defines the contract for delivering payment alerts.
"""

from abc import ABC, abstractmethod
from src.domain.payment_alert import PaymentAlert


class NotificationService(ABC):
    """
    Abstract notification service for sending payment alerts

    Implementations can send notifications via:
    - Log output
    - Webhook (HTTP POST)
    - Any combination of the above
    """

    @abstractmethod
    async def send_payment_alert(self, alert: PaymentAlert) -> bool:
        """
        Send a payment alert

        Args:
            alert: PaymentAlert to deliver

        Returns:
            True if notification sent successfully, False otherwise
        """
        pass
