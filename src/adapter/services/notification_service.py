"""Notification Service Implementations

Provides concrete implementations for delivering payment alerts.
"""

import logging
from typing import Optional
import httpx
from src.app.services.notification_service import NotificationService
from src.domain.payment_alert import PaymentAlert

logger = logging.getLogger(__name__)


class LoggingNotificationService(NotificationService):
    """
    Writes ledger payment alerts to the application log

    Always part of the delivery chain, so every alert leaves a trace even
    when no webhook is configured.
    """

    async def send_payment_alert(self, alert: PaymentAlert) -> bool:
        """
        Log payment alert

        Args:
            alert: PaymentAlert to log

        Returns:
            Always True (logging never fails)
        """
        logger.warning(
            f"[LEDGER ALERT] {alert.headline()} "
            f"(record {alert.record_id} in {_view_of(alert) or 'unassigned view'})"
        )
        return True


class WebhookNotificationService(NotificationService):
    """
    Posts ledger payment alerts to an HTTP webhook

    The JSON body carries a ready-made "text" line for chat integrations,
    the owning view and the full alert.
    """

    def __init__(self, webhook_url: str, timeout: float = 10.0):
        """
        Initialize webhook notification service

        Args:
            webhook_url: URL to POST alerts to
            timeout: Request timeout in seconds
        """
        self.webhook_url = webhook_url
        self.timeout = timeout

    async def send_payment_alert(self, alert: PaymentAlert) -> bool:
        """
        Send payment alert via webhook

        Args:
            alert: PaymentAlert to deliver

        Returns:
            True if webhook call succeeded, False otherwise
        """
        payload = {
            "event": "ledger.payment_alert",
            "text": alert.headline(),
            "view": _view_of(alert),
            "alert": alert.model_dump(mode="json"),
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.webhook_url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
                logger.info(
                    f"Delivered {alert.label} alert for record {alert.record_id} to {self.webhook_url}"
                )
                return True
        except httpx.HTTPError as e:
            logger.error(
                f"Webhook delivery of {alert.label} alert for record {alert.record_id} failed: {e}"
            )
            return False


class CompositeNotificationService(NotificationService):
    """
    Notification service that delegates to multiple services

    Useful for sending to multiple channels (e.g., log + webhook).
    """

    def __init__(self, services: list[NotificationService]):
        self.services = services

    async def send_payment_alert(self, alert: PaymentAlert) -> bool:
        """
        Send payment alert to all configured services

        Returns:
            True if at least one service succeeded, False otherwise
        """
        success = False
        for service in self.services:
            if await service.send_payment_alert(alert):
                success = True
        return success


def _view_of(alert: PaymentAlert) -> Optional[str]:
    if alert.source_module and alert.source_tab:
        return f"{alert.source_module}/{alert.source_tab}"
    return None


def create_notification_service(webhook_url: Optional[str] = None) -> NotificationService:
    """
    Factory function to create appropriate notification service

    Args:
        webhook_url: Optional webhook URL. If provided, creates composite
                     service with logging + webhook. Otherwise, just logging.

    Returns:
        Configured NotificationService
    """
    services: list[NotificationService] = [LoggingNotificationService()]

    if webhook_url:
        services.append(WebhookNotificationService(webhook_url))

    if len(services) == 1:
        return services[0]

    return CompositeNotificationService(services)
