from .unit_of_work import UnitOfWork
from .clock import Clock
from .key_value_store import KeyValueStore
from .notification_service import NotificationService
from .record_collection import (
    RecordCollection,
    LocalRecordCollection,
    FederatedRecordCollection,
    open_record_collection,
)

__all__ = [
    "UnitOfWork",
    "Clock",
    "KeyValueStore",
    "NotificationService",
    "RecordCollection",
    "LocalRecordCollection",
    "FederatedRecordCollection",
    "open_record_collection",
]
