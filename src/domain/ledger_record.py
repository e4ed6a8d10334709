"""Ledger Record Domain Entity

A purchase, payment, export or ticket transaction. Base inputs are edited
by users; derived fields are recomputed from them after every edit and are
never set directly.
"""

from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from src.domain.base import generate_uuid
from src.domain.partition import PartitionKey


class PaymentStatus(str, Enum):
    """Payment status derived from amounts and due date"""
    PAID = "Paid"
    PARTIAL = "Partial"
    PENDING = "Pending"
    OVERDUE = "Overdue"


def _field(alias: str, *legacy: str, **kwargs) -> Any:
    # Stored under the camelCase alias; older views wrote some fields under other names
    if "default_factory" not in kwargs:
        kwargs.setdefault("default", None)
    return Field(
        validation_alias=AliasChoices(alias, *legacy),
        serialization_alias=alias,
        **kwargs,
    )


IDENTITY_FIELDS = frozenset({"id"})
OWNERSHIP_FIELDS = frozenset({"source_module", "source_tab"})
DERIVED_FIELDS = frozenset(
    {"commission", "final_amount", "outstanding_amount", "converted_amount", "status"}
)
REQUIRED_FIELDS = ("counterparty_name", "base_amount", "currency")

_NUMERIC_FIELDS = (
    "base_amount",
    "paid_amount",
    "percent",
    "exchange_rate",
    "weight",
    "commission",
    "final_amount",
    "outstanding_amount",
    "converted_amount",
)


class LedgerRecord(BaseModel):
    """
    Ledger Record - one transaction row owned by a single partition

    Domain Rules:
    - id is assigned once at creation and never changes
    - source_module/source_tab name the owning partition once assigned
    - Derived fields (commission, final_amount, outstanding_amount,
      converted_amount, status) always equal the function of base fields
    - currency == base currency implies no exchange_rate/converted_amount
    - Unknown free-form attributes are kept as extra fields
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    # Identity
    id: str = _field("id", default_factory=generate_uuid)
    code: str = _field("code", default="")
    date: str = _field("date", default="")

    # Base inputs
    counterparty_name: str = _field(
        "counterpartyName", "customerName", "vendorName", "supplierName", default=""
    )
    title: Optional[str] = _field("title")
    description: str = _field("description", default="")
    currency: str = _field("currency", default="")
    base_amount: Optional[Decimal] = _field("baseAmount", "invoiceAmount", "amount")
    paid_amount: Optional[Decimal] = _field("paidAmount")
    percent: Optional[Decimal] = _field("percent")
    exchange_rate: Optional[Decimal] = _field("exchangeRate")
    due_date: Optional[str] = _field("dueDate")

    # Free-form attributes
    weight: Optional[Decimal] = _field("weight")
    company: Optional[str] = _field("company")
    category: Optional[str] = _field("category")
    location: Optional[str] = _field("location")
    deal: Optional[str] = _field("deal")
    payment_method: Optional[str] = _field("paymentMethod")
    payment_date: Optional[str] = _field("paymentDate")
    half_paid: Optional[bool] = _field("halfPaid")
    cleared: Optional[bool] = _field("cleared")
    notes: Optional[str] = _field("notes")

    # Derived
    commission: Optional[Decimal] = _field("commission")
    final_amount: Optional[Decimal] = _field("finalAmount")
    outstanding_amount: Optional[Decimal] = _field("outstandingAmount")
    converted_amount: Optional[Decimal] = _field("convertedAmount")
    status: Optional[PaymentStatus] = _field("status")

    # Ownership
    source_module: Optional[str] = _field("sourceModule")
    source_tab: Optional[str] = _field("sourceTab")

    @field_validator(*_NUMERIC_FIELDS, mode="before")
    @classmethod
    def blank_number_is_missing(cls, v):
        """Empty form inputs mean 'not entered', not zero"""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("due_date", "payment_date", mode="before")
    @classmethod
    def blank_date_is_missing(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        if not v or v == "-":
            return None
        return v

    @field_validator("currency", mode="before")
    @classmethod
    def normalize_currency(cls, v):
        if v is None:
            return ""
        if not isinstance(v, str):
            raise ValueError("currency must be a currency code")
        return v.strip().upper()

    @classmethod
    def canonical_field_name(cls, key: str) -> str:
        """Map a stored or legacy key (e.g. 'invoiceAmount') to the attribute name"""
        return _KEY_TO_FIELD.get(key, key)

    def owner_key(self) -> Optional[PartitionKey]:
        """Partition this record is tagged with, if any"""
        if self.source_module and self.source_tab:
            return PartitionKey(module_id=self.source_module, tab_id=self.source_tab)
        return None

    def missing_required_fields(self) -> list[str]:
        missing = []
        if not self.counterparty_name.strip():
            missing.append("counterparty_name")
        if self.base_amount is None:
            missing.append("base_amount")
        if not self.currency:
            missing.append("currency")
        return missing

    def to_storage(self) -> dict:
        """Flat camelCase dict for the serialized partition blob"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def _build_key_map() -> dict[str, str]:
    mapping = {}
    for name, info in LedgerRecord.model_fields.items():
        mapping[name] = name
        if isinstance(info.validation_alias, AliasChoices):
            for choice in info.validation_alias.choices:
                mapping[choice] = name
    return mapping


_KEY_TO_FIELD = _build_key_map()
