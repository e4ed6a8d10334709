"""Data Transfer Objects for Ledger Use Cases

Pydantic models for command inputs and response outputs.
"""

from decimal import Decimal
from typing import Any, Dict, List
from pydantic import BaseModel, Field

from src.domain.ledger_record import LedgerRecord
from src.domain.payment_alert import PaymentAlert


class CreateRecordCommandDTO(BaseModel):
    """
    Command DTO for creating a ledger record

    Used as input to CreateRecord use case. Keys may be attribute names
    (base_amount) or stored names (baseAmount).
    """

    fields: Dict[str, Any] = Field(
        default_factory=dict,
        description="Base field values; derived fields and id are ignored"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "fields": {
                    "counterpartyName": "Ruby Traders",
                    "currency": "USD",
                    "baseAmount": "1000",
                    "paidAmount": "500",
                    "exchangeRate": "300",
                    "dueDate": "2024-02-15",
                }
            }
        }


class UpdateRecordCommandDTO(BaseModel):
    """
    Command DTO for editing a ledger record

    Only the supplied base fields change; derived fields are recomputed.
    """

    record_id: str = Field(
        ...,
        description="Id of the record to edit"
    )

    changes: Dict[str, Any] = Field(
        default_factory=dict,
        description="Base field values to merge into the record"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "record_id": "6f1c7d7e-2f0b-4c55-8d0e-0a3c5b1f2e9a",
                "changes": {"paidAmount": "1000"},
            }
        }


class DeleteRecordCommandDTO(BaseModel):
    """Command DTO for hard-deleting a ledger record"""

    record_id: str = Field(
        ...,
        description="Id of the record to delete"
    )


class DeleteRecordResponseDTO(BaseModel):
    """
    Response DTO for delete operation

    deleted is False when the id did not exist (nothing changed).
    """

    record_id: str = Field(..., description="Requested record id")

    deleted: bool = Field(..., description="Whether a record was removed")


class ListRecordsResponseDTO(BaseModel):
    """Response DTO for query operation, newest first"""

    records: List[LedgerRecord] = Field(
        default_factory=list,
        description="Matching records"
    )

    total: int = Field(..., description="Number of matching records")


class LedgerSummaryDTO(BaseModel):
    """
    Response DTO for ledger summary

    Totals are in each record's own currency unless named *_in_base_currency.
    """

    record_count: int = Field(..., description="Records in the view")

    total_base_amount: Decimal = Field(..., description="Sum of base amounts")

    total_paid_amount: Decimal = Field(..., description="Sum of paid amounts")

    total_outstanding_amount: Decimal = Field(..., description="Sum of outstanding amounts")

    total_in_base_currency: Decimal = Field(
        ...,
        description="Sum of base amounts converted to the base currency"
    )

    base_currency: str = Field(..., description="Base currency code")

    unconverted_count: int = Field(
        ...,
        description="Records left out of total_in_base_currency (no known rate)"
    )

    paid_count: int = Field(..., description="Records with status Paid")

    pending_count: int = Field(..., description="Records with status Pending or Overdue")

    this_month_count: int = Field(..., description="Records dated in the current month")

    foreign_currency_count: int = Field(..., description="Records not in the base currency")

    class Config:
        json_schema_extra = {
            "example": {
                "record_count": 3,
                "total_base_amount": "3000",
                "total_paid_amount": "1500",
                "total_outstanding_amount": "1500",
                "total_in_base_currency": "604500.00",
                "base_currency": "LKR",
                "unconverted_count": 0,
                "paid_count": 1,
                "pending_count": 1,
                "this_month_count": 2,
                "foreign_currency_count": 2,
            }
        }


class PaymentAlertsResponseDTO(BaseModel):
    """Response DTO for payment alert scan"""

    alerts: List[PaymentAlert] = Field(
        default_factory=list,
        description="Alerts raised, in collection order"
    )

    total: int = Field(..., description="Number of alerts")

    scanned_records: int = Field(..., description="Records examined")

    notified: int = Field(
        default=0,
        description="Alerts delivered successfully through the notification service"
    )
