"""Derived Field Engine

Recomputes every dependent field of a LedgerRecord from its base inputs.
The full dependent set is re-derived on each call, so callers never say
which base field changed and edit order does not matter.
"""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from src.domain.currency import CurrencyTable
from src.domain.errors import CurrencyLookupError, RecordValidationError
from src.domain.ledger_record import (
    DERIVED_FIELDS,
    IDENTITY_FIELDS,
    OWNERSHIP_FIELDS,
    LedgerRecord,
    PaymentStatus,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def _as_amount(value: Any) -> Decimal:
    """Missing or non-numeric amounts count as zero for computation only"""
    if value is None:
        return ZERO
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return ZERO


def derive_status(
    outstanding_amount: Decimal,
    paid_amount: Decimal,
    due_date: Optional[str],
    today: date,
) -> PaymentStatus:
    """
    Four-way payment status

    Paid when nothing is outstanding; otherwise Partial when something was
    paid (Partial wins over Overdue); otherwise Overdue when the due date is
    strictly before today; otherwise Pending. Dates compare as ISO strings.
    """
    if outstanding_amount <= ZERO:
        return PaymentStatus.PAID
    if paid_amount > ZERO:
        return PaymentStatus.PARTIAL
    if due_date and due_date < today.isoformat():
        return PaymentStatus.OVERDUE
    return PaymentStatus.PENDING


class DerivedFieldEngine:
    """
    Pure recomputation of derived ledger fields

    Rules (fixed order, one pass):
    1. Base currency: clear exchange_rate and converted_amount
    2. Foreign currency: converted_amount = paid_amount * exchange_rate when
       both are set (a missing rate is looked up in the currency table)
    3. commission = base_amount * percent / 100 when percent is set
    4. final_amount = base_amount + commission
    5. outstanding_amount = base_amount - paid_amount
    6. status from the amounts just computed

    recompute(recompute(r)) == recompute(r) for every record.
    """

    def __init__(self, currency_table: CurrencyTable):
        self.currency_table = currency_table

    def recompute(self, record: LedgerRecord, today: date) -> LedgerRecord:
        base_amount = _as_amount(record.base_amount)
        paid_amount = _as_amount(record.paid_amount)

        # Steps 1-2: currency conversion
        if self.currency_table.is_base(record.currency):
            exchange_rate = None
            converted_amount = None
        else:
            exchange_rate = record.exchange_rate
            if exchange_rate is None and record.currency:
                exchange_rate = self._lookup_rate(record.currency)
            if exchange_rate is not None and record.paid_amount is not None:
                converted_amount = paid_amount * exchange_rate
            else:
                converted_amount = None

        # Step 3-4: commission and final amount
        if record.percent is not None:
            commission = base_amount * record.percent / HUNDRED
        else:
            commission = None
        final_amount = base_amount + (commission if commission is not None else ZERO)

        # Step 5-6: outstanding balance and status
        outstanding_amount = base_amount - paid_amount
        status = derive_status(outstanding_amount, paid_amount, record.due_date, today)

        return record.model_copy(
            update={
                "exchange_rate": exchange_rate,
                "converted_amount": converted_amount,
                "commission": commission,
                "final_amount": final_amount,
                "outstanding_amount": outstanding_amount,
                "status": status,
            }
        )

    def apply_changes(
        self,
        record: LedgerRecord,
        changes: Mapping[str, Any],
        today: date,
        allow_ownership: bool = False,
    ) -> LedgerRecord:
        """
        Merge user edits into a record and recompute

        Keys may be attribute names or stored/legacy aliases. Identity and
        derived keys are ignored; ownership keys are accepted only when
        allow_ownership is set (record creation). Changing the currency
        without supplying a rate drops the old rate so it is re-derived.

        Raises:
            RecordValidationError: A supplied value has the wrong type
        """
        protected = IDENTITY_FIELDS | DERIVED_FIELDS
        if not allow_ownership:
            protected = protected | OWNERSHIP_FIELDS

        normalized: dict[str, Any] = {}
        for key, value in changes.items():
            name = LedgerRecord.canonical_field_name(key)
            if name in protected:
                logger.debug(f"Ignoring edit of protected field {name} on record {record.id}")
                continue
            normalized[name] = value

        merged = {**record.model_dump(), **normalized}
        try:
            updated = LedgerRecord.model_validate(merged)
        except ValidationError as e:
            fields = [
                LedgerRecord.canonical_field_name(str(err["loc"][0]))
                for err in e.errors()
                if err.get("loc")
            ]
            raise RecordValidationError(fields) from e

        if "exchange_rate" not in normalized and updated.currency != record.currency:
            updated = updated.model_copy(update={"exchange_rate": None})

        return self.recompute(updated, today)

    def _lookup_rate(self, currency: str) -> Optional[Decimal]:
        try:
            return self.currency_table.rate_of(currency)
        except CurrencyLookupError as e:
            logger.warning(f"{e}; converted amount left undefined")
            return None
