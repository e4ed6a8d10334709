from .base import BaseModel, generate_uuid
from .currency import CurrencyTable
from .derived_fields import DerivedFieldEngine, derive_status
from .errors import LedgerError, RecordValidationError, PartitionReadError, CurrencyLookupError
from .ledger_record import LedgerRecord, PaymentStatus
from .partition import PartitionKey, FederationRegistry, normalize_tab_id
from .partition_blob import PartitionBlob
from .payment_alert import PaymentAlert, AlertType
from .record_query import RecordQuery, apply_query

__all__ = [
    "BaseModel",
    "generate_uuid",
    "CurrencyTable",
    "DerivedFieldEngine",
    "derive_status",
    "LedgerError",
    "RecordValidationError",
    "PartitionReadError",
    "CurrencyLookupError",
    "LedgerRecord",
    "PaymentStatus",
    "PartitionKey",
    "FederationRegistry",
    "normalize_tab_id",
    "PartitionBlob",
    "PaymentAlert",
    "AlertType",
    "RecordQuery",
    "apply_query",
]
