"""Query Pipeline

Search, filter and sort over an in-memory record collection. Pure: no
persistence side effects.
"""

from enum import Enum
from typing import Dict, Iterable, Optional, Sequence
from pydantic import BaseModel, Field

from src.domain.ledger_record import LedgerRecord

MATCH_ALL = frozenset({"All", "all"})

DEFAULT_SEARCH_FIELDS = (
    "counterparty_name",
    "code",
    "title",
    "description",
    "company",
    "deal",
    "category",
    "location",
)


class RecordQuery(BaseModel):
    """Filter criteria for a ledger view"""

    search: str = Field(
        default="",
        description="Case-insensitive substring matched against the searchable fields"
    )

    filters: Dict[str, str] = Field(
        default_factory=dict,
        description="Exact-match filters by field name (e.g. currency, status, company); 'All' matches everything"
    )

    date_from: Optional[str] = Field(
        default=None,
        description="Inclusive lower bound, ISO YYYY-MM-DD"
    )

    date_to: Optional[str] = Field(
        default=None,
        description="Inclusive upper bound, ISO YYYY-MM-DD"
    )


def _text(record: LedgerRecord, field: str) -> Optional[str]:
    name = LedgerRecord.canonical_field_name(field)
    value = getattr(record, name, None)
    if value is None and record.model_extra:
        value = record.model_extra.get(field)
    if value is None:
        return None
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def matches_search(record: LedgerRecord, search: str, fields: Sequence[str]) -> bool:
    needle = search.strip().lower()
    if not needle:
        return True
    for field in fields:
        value = _text(record, field)
        if value and needle in value.lower():
            return True
    return False


def matches_filters(record: LedgerRecord, filters: Dict[str, str]) -> bool:
    for field, expected in filters.items():
        if expected is None or expected in MATCH_ALL:
            continue
        if _text(record, field) != expected:
            return False
    return True


def matches_date_range(record: LedgerRecord, date_from: Optional[str], date_to: Optional[str]) -> bool:
    # ISO dates sort lexicographically in chronological order
    if date_from and record.date < date_from:
        return False
    if date_to and record.date > date_to:
        return False
    return True


def apply_query(
    records: Iterable[LedgerRecord],
    query: RecordQuery,
    search_fields: Sequence[str] = DEFAULT_SEARCH_FIELDS,
) -> list[LedgerRecord]:
    """
    Apply search, filters and date range (all ANDed), newest first

    The sort is stable: records sharing a date keep their relative order.
    """
    selected = [
        record
        for record in records
        if matches_search(record, query.search, search_fields)
        and matches_filters(record, query.filters)
        and matches_date_range(record, query.date_from, query.date_to)
    ]
    return sorted(selected, key=lambda r: r.date, reverse=True)
