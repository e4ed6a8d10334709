from .unit_of_work import SqlAlchemyUnitOfWork, InMemoryUnitOfWork
from .clock import SystemClock, FixedClock
from .key_value_store import InMemoryKeyValueStore, SqlAlchemyKeyValueStore
from .notification_service import (
    LoggingNotificationService,
    WebhookNotificationService,
    CompositeNotificationService,
    create_notification_service,
)

__all__ = [
    "SqlAlchemyUnitOfWork",
    "InMemoryUnitOfWork",
    "SystemClock",
    "FixedClock",
    "InMemoryKeyValueStore",
    "SqlAlchemyKeyValueStore",
    "LoggingNotificationService",
    "WebhookNotificationService",
    "CompositeNotificationService",
    "create_notification_service",
]
