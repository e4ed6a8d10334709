"""Domain errors

None of these are fatal: callers recover locally (reject a save, treat a
partition as empty, leave a converted amount undefined).
"""

from typing import Iterable


class LedgerError(Exception):
    """Base class for ledger domain errors"""


class RecordValidationError(LedgerError):
    """Required base fields are missing or not numeric"""

    def __init__(self, fields: Iterable[str]):
        self.fields = sorted(set(fields))
        super().__init__(f"Missing or invalid fields: {', '.join(self.fields)}")


class PartitionReadError(LedgerError):
    """Stored partition data could not be parsed"""

    def __init__(self, storage_key: str, reason: str):
        self.storage_key = storage_key
        self.reason = reason
        super().__init__(f"Unreadable partition {storage_key}: {reason}")


class CurrencyLookupError(LedgerError):
    """No exchange rate configured for a currency"""

    def __init__(self, currency: str):
        self.currency = currency
        super().__init__(f"No exchange rate configured for currency {currency!r}")
