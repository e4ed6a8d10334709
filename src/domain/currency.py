"""Currency Conversion Table

Static mapping from currency code to its rate against the base currency.
Injected at startup from configuration.
"""

from decimal import Decimal
from typing import Mapping, Optional, Union

from src.domain.errors import CurrencyLookupError

DEFAULT_BASE_CURRENCY = "LKR"

DEFAULT_EXCHANGE_RATES = {
    "LKR": "1.00",
    "USD": "302.50",
    "EUR": "330.20",
    "GBP": "385.80",
    "TZS": "0.1251",
    "KES": "2.33",
    "THB": "8.50",
}


class CurrencyTable:
    """
    Exchange rates against a designated base currency

    Rates are held as Decimal. The base currency always converts at 1 even
    when the mapping omits it; any other unknown code is a lookup error.
    """

    def __init__(
        self,
        base_currency: str = DEFAULT_BASE_CURRENCY,
        rates: Optional[Mapping[str, Union[str, int, float, Decimal]]] = None,
    ):
        self.base_currency = base_currency.strip().upper()
        source = DEFAULT_EXCHANGE_RATES if rates is None else rates
        self._rates = {
            code.strip().upper(): Decimal(str(rate)) for code, rate in source.items()
        }

    def is_base(self, currency: Optional[str]) -> bool:
        return (currency or "").strip().upper() == self.base_currency

    def rate_of(self, currency: str) -> Decimal:
        """
        Look up the rate for a currency code

        Raises:
            CurrencyLookupError: No rate configured for a non-base currency
        """
        code = (currency or "").strip().upper()
        if code == self.base_currency:
            return Decimal("1")
        try:
            return self._rates[code]
        except KeyError:
            raise CurrencyLookupError(code) from None

    def to_base(
        self,
        amount: Decimal,
        currency: Optional[str],
        exchange_rate: Optional[Decimal] = None,
    ) -> Optional[Decimal]:
        """
        Express an amount in the base currency

        Uses the record's own rate when given, else the table rate.
        Returns None when the currency cannot be converted.
        """
        if self.is_base(currency):
            return amount
        if exchange_rate is not None:
            return amount * exchange_rate
        try:
            return amount * self.rate_of(currency or "")
        except CurrencyLookupError:
            return None
