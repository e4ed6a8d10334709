"""Unit tests for CurrencyTable"""

import pytest
from decimal import Decimal

from src.domain.currency import CurrencyTable
from src.domain.errors import CurrencyLookupError


class TestCurrencyTable:
    """Test rate lookups against the base currency"""

    def test_default_rates(self):
        table = CurrencyTable()

        assert table.base_currency == "LKR"
        assert table.rate_of("USD") == Decimal("302.50")
        assert table.rate_of("tzs") == Decimal("0.1251")

    def test_base_currency_converts_at_one_even_when_omitted(self):
        """Test the base currency needs no entry in the mapping"""
        table = CurrencyTable("USD", {"EUR": "1.08"})

        assert table.rate_of("USD") == Decimal("1")
        assert table.is_base(" usd ")

    def test_unknown_currency_raises(self):
        table = CurrencyTable()

        with pytest.raises(CurrencyLookupError) as exc_info:
            table.rate_of("XYZ")

        assert exc_info.value.currency == "XYZ"

    def test_float_rates_are_held_exactly(self):
        """Test configured floats become their decimal text, not binary noise"""
        table = CurrencyTable("LKR", {"KES": 2.33})

        assert table.rate_of("KES") == Decimal("2.33")


class TestToBase:
    """Test expressing amounts in the base currency"""

    def test_base_currency_amount_is_unchanged(self):
        table = CurrencyTable()

        assert table.to_base(Decimal("500"), "LKR") == Decimal("500")

    def test_record_rate_wins_over_table_rate(self):
        table = CurrencyTable()

        assert table.to_base(Decimal("2"), "USD", Decimal("300")) == Decimal("600")

    def test_table_rate_used_without_record_rate(self):
        table = CurrencyTable()

        assert table.to_base(Decimal("2"), "USD") == Decimal("605.00")

    def test_unknown_currency_is_not_convertible(self):
        table = CurrencyTable()

        assert table.to_base(Decimal("2"), "XYZ") is None
        assert table.to_base(Decimal("2"), None) is None
