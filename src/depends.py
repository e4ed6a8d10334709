from decimal import Decimal
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import Depends
from config import ApplicationConfig
from src.adapter.repositories.record_partition_repository import KeyValueRecordPartitionRepository
from src.adapter.services.clock import SystemClock
from src.adapter.services.key_value_store import InMemoryKeyValueStore, SqlAlchemyKeyValueStore
from src.adapter.services.notification_service import create_notification_service
from src.adapter.services.unit_of_work import InMemoryUnitOfWork, SqlAlchemyUnitOfWork
from src.app.repositories.record_partition_repository import RecordPartitionRepository
from src.app.services.clock import Clock
from src.app.services.key_value_store import KeyValueStore
from src.app.services.notification_service import NotificationService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.currency import CurrencyTable
from src.domain.derived_fields import DerivedFieldEngine
from src.domain.partition import FederationRegistry

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

currency_table = CurrencyTable(ApplicationConfig.BASE_CURRENCY, ApplicationConfig.EXCHANGE_RATES)
federation_registry = FederationRegistry.from_config(ApplicationConfig.FEDERATION_REGISTRY)
memory_store = InMemoryKeyValueStore()


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def use_sql_store() -> bool:
    return ApplicationConfig.STORE_BACKEND == "sql"


async def get_unit_of_work(session: AsyncSession = Depends(get_session)) -> UnitOfWork:
    if use_sql_store():
        return SqlAlchemyUnitOfWork(session)
    return InMemoryUnitOfWork()


async def get_key_value_store(session: AsyncSession = Depends(get_session)) -> KeyValueStore:
    if use_sql_store():
        return SqlAlchemyKeyValueStore(session)
    return memory_store


async def get_partition_repository(
    store: KeyValueStore = Depends(get_key_value_store),
) -> RecordPartitionRepository:
    return KeyValueRecordPartitionRepository(
        store,
        entity_kind=ApplicationConfig.PARTITION_ENTITY_KIND,
        legacy_prefixes=ApplicationConfig.LEGACY_PARTITION_PREFIXES,
    )


def get_currency_table() -> CurrencyTable:
    return currency_table


def get_derived_field_engine(table: CurrencyTable = Depends(get_currency_table)) -> DerivedFieldEngine:
    return DerivedFieldEngine(table)


def get_federation_registry() -> FederationRegistry:
    return federation_registry


def get_clock() -> Clock:
    return SystemClock()


def get_notification_service() -> NotificationService:
    return create_notification_service(ApplicationConfig.ALERT_NOTIFICATION_WEBHOOK)


def get_alert_threshold() -> Decimal:
    return Decimal(str(ApplicationConfig.ALERT_HIGH_OUTSTANDING_THRESHOLD))
