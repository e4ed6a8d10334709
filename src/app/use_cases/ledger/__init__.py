"""Ledger use cases"""
from .create_record import CreateRecord
from .update_record import UpdateRecord
from .delete_record import DeleteRecord
from .query_records import QueryRecords
from .summarize_records import SummarizeRecords
from .detect_payment_alerts import DetectPaymentAlerts
from .dtos import (
    CreateRecordCommandDTO,
    UpdateRecordCommandDTO,
    DeleteRecordCommandDTO,
    DeleteRecordResponseDTO,
    ListRecordsResponseDTO,
    LedgerSummaryDTO,
    PaymentAlertsResponseDTO,
)

__all__ = [
    "CreateRecord",
    "UpdateRecord",
    "DeleteRecord",
    "QueryRecords",
    "SummarizeRecords",
    "DetectPaymentAlerts",
    "CreateRecordCommandDTO",
    "UpdateRecordCommandDTO",
    "DeleteRecordCommandDTO",
    "DeleteRecordResponseDTO",
    "ListRecordsResponseDTO",
    "LedgerSummaryDTO",
    "PaymentAlertsResponseDTO",
]
