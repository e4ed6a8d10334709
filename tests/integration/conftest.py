import pytest
import pytest_asyncio
from datetime import date
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from src.adapter.services.clock import FixedClock
from src.depends import get_clock, get_federation_registry, get_session
from src.domain.partition import FederationRegistry, PartitionKey
from src.domain.partition_blob import PartitionBlob  # noqa: F401 (registers the table)

TODAY = date(2024, 1, 20)

MOTHER = PartitionKey(module_id="outstanding", tab_id="All Payments")
RECEIVED = PartitionKey(module_id="outstanding", tab_id="Payment Received")
KENYA = PartitionKey(module_id="kenya", tab_id="Payments")


@pytest_asyncio.fixture(scope="function")
async def engine():
    """Create test database engine on a fresh in-memory SQLite database"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with Session() as session:
        yield session


@pytest.fixture
def registry():
    """outstanding/All Payments aggregates Payment Received and kenya/Payments"""
    return FederationRegistry({MOTHER: [RECEIVED, KENYA]})


@pytest_asyncio.fixture
async def client(db_session, registry):
    """Create test client with database session, clock and registry overrides"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_clock] = lambda: FixedClock(TODAY)
    app.dependency_overrides[get_federation_registry] = lambda: registry

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
