"""SummarizeRecords Use Case

Statistics over the records visible from a view: totals, status counts and
currency mix.
"""

import logging
from decimal import Decimal
from src.libs.result import Result, Return, Error
from src.app.services.clock import Clock
from src.app.services.record_collection import RecordCollection
from src.domain.currency import CurrencyTable
from src.domain.ledger_record import PaymentStatus
from .dtos import LedgerSummaryDTO

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class SummarizeRecords:
    """
    Use Case: Summarize a view

    Business Rules:
    1. Amount totals add each record's own figures, whatever its currency
    2. total_in_base_currency converts base_amount with the record's rate
       (or the table rate); records with no known rate are added unconverted
       and counted in unconverted_count
    3. pending_count includes Overdue records
    4. this_month_count uses the record date against the clock's month
    """

    def __init__(
        self,
        collection: RecordCollection,
        currency_table: CurrencyTable,
        clock: Clock,
    ):
        self.collection = collection
        self.currency_table = currency_table
        self.clock = clock

    async def execute(self) -> Result[LedgerSummaryDTO]:
        try:
            await self.collection.refresh()
            records = self.collection.records
            month_prefix = self.clock.today().strftime("%Y-%m")

            total_base = ZERO
            total_paid = ZERO
            total_outstanding = ZERO
            total_in_base = ZERO
            unconverted = 0
            paid_count = 0
            pending_count = 0
            this_month = 0
            foreign = 0

            for record in records:
                base_amount = record.base_amount or ZERO
                total_base += base_amount
                total_paid += record.paid_amount or ZERO
                total_outstanding += record.outstanding_amount or ZERO

                converted = self.currency_table.to_base(
                    base_amount, record.currency, record.exchange_rate
                )
                if converted is None:
                    unconverted += 1
                    converted = base_amount
                total_in_base += converted

                if record.status == PaymentStatus.PAID:
                    paid_count += 1
                elif record.status in (PaymentStatus.PENDING, PaymentStatus.OVERDUE):
                    pending_count += 1

                if record.date.startswith(month_prefix):
                    this_month += 1
                if not self.currency_table.is_base(record.currency):
                    foreign += 1

            if unconverted:
                logger.warning(
                    f"{unconverted} records in {self.collection.key} have no exchange rate; "
                    f"added to the base-currency total unconverted"
                )

            return Return.ok(
                LedgerSummaryDTO(
                    record_count=len(records),
                    total_base_amount=total_base,
                    total_paid_amount=total_paid,
                    total_outstanding_amount=total_outstanding,
                    total_in_base_currency=total_in_base,
                    base_currency=self.currency_table.base_currency,
                    unconverted_count=unconverted,
                    paid_count=paid_count,
                    pending_count=pending_count,
                    this_month_count=this_month,
                    foreign_currency_count=foreign,
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="SUMMARY_FAILED",
                    message="Failed to summarize records",
                    reason=str(e),
                )
            )
