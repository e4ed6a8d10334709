"""Payment Alert Domain Entity

Raised for records that still have money outstanding and are overdue, due
soon, or unusually large.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class AlertType(str, Enum):
    """Payment alert types"""
    OVERDUE = "overdue"                     # Due date already passed
    DUE_TODAY = "due_today"                 # Due date is today
    UPCOMING = "upcoming"                   # Due within the upcoming window
    HIGH_OUTSTANDING = "high_outstanding"   # Large unpaid balance, no due-date trigger


ALERT_LABELS = {
    AlertType.OVERDUE: "Overdue",
    AlertType.DUE_TODAY: "Due Today",
    AlertType.UPCOMING: "Upcoming",
    AlertType.HIGH_OUTSTANDING: "High Outstanding",
}


class PaymentAlert(BaseModel):
    """
    Payment Alert - derived from one ledger record, never persisted

    Domain Rules:
    - Only records with outstanding_amount > 0 raise alerts
    - Due-date alerts take precedence over high_outstanding
    - amount is expressed in the base currency
    """

    record_id: str = Field(..., description="Ledger record the alert refers to")

    alert_type: AlertType = Field(..., description="Alert type")

    title: str = Field(..., description="Counterparty name, or 'Unknown' when blank")

    amount: Decimal = Field(..., description="Outstanding amount in the base currency")

    currency: str = Field(..., description="Base currency code")

    due_date: Optional[str] = Field(default=None, description="Due date, ISO YYYY-MM-DD")

    source_module: Optional[str] = Field(default=None, description="Owning module")

    source_tab: Optional[str] = Field(default=None, description="Owning tab")

    description: Optional[str] = Field(default=None, description="Record description or code")

    @property
    def label(self) -> str:
        return ALERT_LABELS[self.alert_type]

    def headline(self) -> str:
        """One-line text for log lines and chat webhooks"""
        due = f", due {self.due_date}" if self.due_date else ""
        return f"{self.label}: {self.title} owes {self.currency} {self.amount:,.2f}{due}"
