"""DetectPaymentAlerts Use Case

Scans a view for records that need attention: overdue, due today, due
soon, or carrying a large unpaid balance.
"""

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional
from src.libs.result import Result, Return, Error
from src.app.services.clock import Clock
from src.app.services.notification_service import NotificationService
from src.app.services.record_collection import RecordCollection
from src.domain.currency import CurrencyTable
from src.domain.ledger_record import LedgerRecord, PaymentStatus
from src.domain.payment_alert import AlertType, PaymentAlert
from .dtos import PaymentAlertsResponseDTO

logger = logging.getLogger(__name__)

DEFAULT_HIGH_OUTSTANDING_THRESHOLD = Decimal("100000")
DEFAULT_UPCOMING_DAYS = 7


class DetectPaymentAlerts:
    """
    Use Case: Detect payment alerts

    Business Rules:
    1. Only records with outstanding_amount > 0 are considered
    2. Due-date checks first: overdue (before today), due_today, upcoming
       (within upcoming_days after today)
    3. Otherwise high_outstanding when the outstanding amount in the base
       currency reaches the threshold and the status is Pending or Partial
    4. At most one alert per record
    5. Alerts are delivered through the notification service when one is set;
       a failed delivery does not fail the scan
    """

    def __init__(
        self,
        collection: RecordCollection,
        currency_table: CurrencyTable,
        clock: Clock,
        notification_service: Optional[NotificationService] = None,
        high_outstanding_threshold: Decimal = DEFAULT_HIGH_OUTSTANDING_THRESHOLD,
        upcoming_days: int = DEFAULT_UPCOMING_DAYS,
    ):
        self.collection = collection
        self.currency_table = currency_table
        self.clock = clock
        self.notification_service = notification_service
        self.high_outstanding_threshold = high_outstanding_threshold
        self.upcoming_days = upcoming_days

    async def execute(self) -> Result[PaymentAlertsResponseDTO]:
        """
        Execute payment alert scan

        Returns:
            Result[PaymentAlertsResponseDTO]: Alerts raised and delivery count
        """
        try:
            await self.collection.refresh()
            records = self.collection.records
            today = self.clock.today()

            alerts: list[PaymentAlert] = []
            for record in records:
                alert = self._check(record, today)
                if alert:
                    alerts.append(alert)

            logger.info(
                f"Payment alert scan of {self.collection.key}: "
                f"{len(alerts)} alerts from {len(records)} records"
            )

            notified = 0
            if self.notification_service:
                for alert in alerts:
                    if await self.notification_service.send_payment_alert(alert):
                        notified += 1

            return Return.ok(
                PaymentAlertsResponseDTO(
                    alerts=alerts,
                    total=len(alerts),
                    scanned_records=len(records),
                    notified=notified,
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="ALERT_SCAN_FAILED",
                    message="Failed to scan for payment alerts",
                    reason=str(e),
                )
            )

    def _check(self, record: LedgerRecord, today: date) -> Optional[PaymentAlert]:
        outstanding = record.outstanding_amount or Decimal("0")
        if outstanding <= 0:
            return None

        amount = self.currency_table.to_base(outstanding, record.currency, record.exchange_rate)
        if amount is None:
            amount = outstanding

        alert_type = self._due_date_alert(record.due_date, today)
        if alert_type is None:
            if amount < self.high_outstanding_threshold:
                return None
            if record.status not in (PaymentStatus.PENDING, PaymentStatus.PARTIAL):
                return None
            alert_type = AlertType.HIGH_OUTSTANDING

        return PaymentAlert(
            record_id=record.id,
            alert_type=alert_type,
            title=record.counterparty_name.strip() or "Unknown",
            amount=amount,
            currency=self.currency_table.base_currency,
            due_date=record.due_date,
            source_module=record.source_module,
            source_tab=record.source_tab,
            description=record.description or record.code or None,
        )

    def _due_date_alert(self, due_date: Optional[str], today: date) -> Optional[AlertType]:
        if not due_date:
            return None

        today_iso = today.isoformat()
        if due_date < today_iso:
            return AlertType.OVERDUE
        if due_date == today_iso:
            return AlertType.DUE_TODAY
        if due_date <= (today + timedelta(days=self.upcoming_days)).isoformat():
            return AlertType.UPCOMING
        return None
