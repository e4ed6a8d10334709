"""Key-value implementation of RecordPartitionRepository

Stores each partition as a JSON array of flat camelCase record objects
under a key derived from (entity_kind, module_id, tab_id).
"""

import json
import logging
from typing import Optional, Sequence
from pydantic import ValidationError
from src.app.repositories.record_partition_repository import RecordPartitionRepository
from src.app.services.key_value_store import KeyValueStore
from src.domain.errors import PartitionReadError
from src.domain.ledger_record import LedgerRecord
from src.domain.partition import PartitionKey

logger = logging.getLogger(__name__)

DEFAULT_ENTITY_KIND = "unified_payment_ledger"
DEFAULT_LEGACY_PREFIXES = ("payment_ledger", "payment")


class KeyValueRecordPartitionRepository(RecordPartitionRepository):
    """
    Partition repository over a KeyValueStore

    Features:
    - Primary key: {entity_kind}_{module_id}_{normalized_tab_id}
    - Legacy key variants tried in order when the primary key is absent
      or unreadable; the first readable one wins
    - Writes always go to the primary key
    - Legacy field names (invoiceAmount, customerName, ...) accepted on read
    """

    def __init__(
        self,
        store: KeyValueStore,
        entity_kind: str = DEFAULT_ENTITY_KIND,
        legacy_prefixes: Sequence[str] = DEFAULT_LEGACY_PREFIXES,
    ):
        self.store = store
        self.entity_kind = entity_kind
        self.legacy_prefixes = tuple(legacy_prefixes)

    def storage_key(self, key: PartitionKey) -> str:
        return f"{self.entity_kind}_{key.storage_suffix()}"

    def candidate_keys(self, key: PartitionKey) -> list[str]:
        """Storage keys in preference order"""
        suffix = key.storage_suffix()
        keys = [self.storage_key(key)]
        keys.extend(f"{prefix}_{suffix}" for prefix in self.legacy_prefixes)
        return keys

    async def load(self, key: PartitionKey) -> list[LedgerRecord]:
        """
        Load records from the first readable candidate key

        Raises:
            PartitionReadError: Data exists but none of it could be parsed
        """
        failure: Optional[PartitionReadError] = None

        for storage_key in self.candidate_keys(key):
            raw = await self.store.get(storage_key)
            if raw is None:
                continue
            try:
                return self._decode(storage_key, raw)
            except PartitionReadError as e:
                logger.warning(f"{e}; trying next key variant")
                failure = failure or e

        if failure:
            raise failure
        return []

    async def write_all(self, key: PartitionKey, records: Sequence[LedgerRecord]) -> None:
        storage_key = self.storage_key(key)
        payload = json.dumps([record.to_storage() for record in records])
        await self.store.set(storage_key, payload)
        logger.debug(f"Wrote {len(records)} records to {storage_key}")

    def _decode(self, storage_key: str, raw: str) -> list[LedgerRecord]:
        try:
            items = json.loads(raw)
        except ValueError as e:
            raise PartitionReadError(storage_key, f"invalid JSON ({e})") from e

        if not isinstance(items, list):
            raise PartitionReadError(storage_key, f"expected a list, got {type(items).__name__}")

        try:
            return [LedgerRecord.model_validate(item) for item in items]
        except ValidationError as e:
            raise PartitionReadError(storage_key, f"invalid record ({e.error_count()} errors)") from e
