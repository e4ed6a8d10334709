"""Unit tests for notification service implementations"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import httpx

from src.adapter.services.notification_service import (
    CompositeNotificationService,
    LoggingNotificationService,
    WebhookNotificationService,
    create_notification_service,
)
from src.domain.payment_alert import AlertType, PaymentAlert


@pytest.fixture
def alert():
    return PaymentAlert(
        record_id="rec-1",
        alert_type=AlertType.OVERDUE,
        title="Ruby Traders",
        amount=Decimal("150000"),
        currency="LKR",
        due_date="2024-01-10",
        source_module="outstanding",
        source_tab="Payment Due",
    )


def mock_async_client(post):
    client = MagicMock()
    client.post = post
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return client


@pytest.mark.asyncio
class TestNotificationServices:
    """Test alert delivery"""

    async def test_logging_service_always_succeeds(self, alert, caplog):
        service = LoggingNotificationService()

        with caplog.at_level("WARNING"):
            assert await service.send_payment_alert(alert) is True

        assert "Overdue: Ruby Traders owes LKR 150,000.00, due 2024-01-10" in caplog.text
        assert "outstanding/Payment Due" in caplog.text

    async def test_webhook_posts_alert_json(self, alert):
        """Test the webhook receives the alert fields as JSON"""
        # Arrange
        response = MagicMock()
        response.raise_for_status = MagicMock()
        post = AsyncMock(return_value=response)
        service = WebhookNotificationService("https://hooks.example.com/alerts")

        # Act
        with patch("httpx.AsyncClient", return_value=mock_async_client(post)):
            delivered = await service.send_payment_alert(alert)

        # Assert
        assert delivered is True
        payload = post.call_args.kwargs["json"]
        assert payload["event"] == "ledger.payment_alert"
        assert payload["text"] == "Overdue: Ruby Traders owes LKR 150,000.00, due 2024-01-10"
        assert payload["view"] == "outstanding/Payment Due"
        assert payload["alert"]["record_id"] == "rec-1"
        assert payload["alert"]["alert_type"] == "overdue"

    async def test_webhook_failure_returns_false(self, alert):
        post = AsyncMock(side_effect=httpx.ConnectError("refused"))
        service = WebhookNotificationService("https://hooks.example.com/alerts")

        with patch("httpx.AsyncClient", return_value=mock_async_client(post)):
            assert await service.send_payment_alert(alert) is False

    async def test_composite_succeeds_if_any_service_succeeds(self, alert):
        failing = MagicMock()
        failing.send_payment_alert = AsyncMock(return_value=False)
        working = MagicMock()
        working.send_payment_alert = AsyncMock(return_value=True)

        service = CompositeNotificationService([failing, working])

        assert await service.send_payment_alert(alert) is True
        failing.send_payment_alert.assert_awaited_once_with(alert)


class TestCreateNotificationService:
    def test_logging_only_without_webhook(self):
        assert isinstance(create_notification_service(None), LoggingNotificationService)

    def test_composite_with_webhook(self):
        service = create_notification_service("https://hooks.example.com/alerts")

        assert isinstance(service, CompositeNotificationService)
        assert isinstance(service.services[1], WebhookNotificationService)


class TestAlertHeadline:
    def test_headline_without_due_date(self):
        alert = PaymentAlert(
            record_id="rec-2",
            alert_type=AlertType.HIGH_OUTSTANDING,
            title="Blue Gems",
            amount=Decimal("302500"),
            currency="LKR",
        )

        assert alert.label == "High Outstanding"
        assert alert.headline() == "High Outstanding: Blue Gems owes LKR 302,500.00"
