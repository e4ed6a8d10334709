"""Partition keys and the Federation Registry

A partition is one independently persisted bucket of ledger records,
addressed by a (module_id, tab_id) pair. The registry lists which
partitions a "mother" view aggregates.
"""

import re
from typing import Any, Iterable, Mapping
from pydantic import BaseModel, ConfigDict, Field

_WHITESPACE = re.compile(r"\s+")
_NON_KEY_CHARS = re.compile(r"[^a-zA-Z0-9_]")


def normalize_tab_id(tab_id: str) -> str:
    """Storage-safe tab id: 'Payment Received' -> 'Payment_Received'"""
    collapsed = _WHITESPACE.sub("_", tab_id.strip())
    return _NON_KEY_CHARS.sub("", collapsed)


class PartitionKey(BaseModel):
    """Address of one partition"""

    model_config = ConfigDict(frozen=True)

    module_id: str = Field(..., min_length=1, description="Owning module (e.g. 'outstanding')")
    tab_id: str = Field(..., min_length=1, description="Tab inside the module (e.g. 'Payment Received')")

    def storage_suffix(self) -> str:
        return f"{self.module_id}_{normalize_tab_id(self.tab_id)}"

    def __str__(self) -> str:
        return f"{self.module_id}/{self.tab_id}"


class FederationRegistry:
    """
    Declarative map of mother views to their sibling partitions

    A view with no entry is non-federated and works against its own
    partition only. Read-only once built.
    """

    def __init__(self, aggregates: Mapping[PartitionKey, Iterable[PartitionKey]] | None = None):
        self._aggregates: dict[PartitionKey, tuple[PartitionKey, ...]] = {
            mother: tuple(siblings) for mother, siblings in (aggregates or {}).items()
        }

    @classmethod
    def from_config(cls, entries: Iterable[Mapping[str, Any]] | None) -> "FederationRegistry":
        """
        Build from configuration entries of the form

            {"module": "outstanding", "tab": "All Payments",
             "siblings": [{"module": "outstanding", "tab": "Payment Received"}, ...]}
        """
        aggregates = {}
        for entry in entries or []:
            mother = PartitionKey(module_id=entry["module"], tab_id=entry["tab"])
            aggregates[mother] = [
                PartitionKey(module_id=s["module"], tab_id=s["tab"])
                for s in entry.get("siblings", [])
            ]
        return cls(aggregates)

    def is_federated(self, key: PartitionKey) -> bool:
        return bool(self._aggregates.get(key))

    def siblings_of(self, key: PartitionKey) -> tuple[PartitionKey, ...]:
        return self._aggregates.get(key, ())
