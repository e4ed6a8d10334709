import pytest
from datetime import date
from unittest.mock import AsyncMock, MagicMock

from src.adapter.services.clock import FixedClock
from src.domain.currency import CurrencyTable
from src.domain.derived_fields import DerivedFieldEngine

TODAY = date(2024, 1, 20)


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def clock():
    return FixedClock(TODAY)


@pytest.fixture
def currency_table():
    """Default LKR table (USD 302.50, EUR 330.20, ...)"""
    return CurrencyTable()


@pytest.fixture
def engine(currency_table):
    return DerivedFieldEngine(currency_table)
