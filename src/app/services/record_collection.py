"""Record collections and the Federation Router

A view works against a RecordCollection. Ordinary views use a
LocalRecordCollection bound to their own partition. Mother views listed in
the FederationRegistry use a FederatedRecordCollection, which merges the
sibling partitions into one virtual collection and routes every write back
to the partition that owns the record.

Records are recomputed as they are read, so derived fields always reflect
the current base fields and the clock's today.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence
from src.app.repositories.record_partition_repository import RecordPartitionRepository
from src.app.services.clock import Clock
from src.domain.derived_fields import DerivedFieldEngine
from src.domain.errors import PartitionReadError, RecordValidationError
from src.domain.ledger_record import LedgerRecord
from src.domain.partition import FederationRegistry, PartitionKey

logger = logging.getLogger(__name__)


class RecordCollection(ABC):
    """
    In-memory view of the records visible from one (module_id, tab_id)

    Callers must await refresh() before reading records, and must treat
    records as authoritative only after the mutation they issued returns.
    """

    def __init__(
        self,
        partition_repo: RecordPartitionRepository,
        key: PartitionKey,
        engine: DerivedFieldEngine,
        clock: Clock,
    ):
        self.partition_repo = partition_repo
        self.key = key
        self.engine = engine
        self.clock = clock
        self._records: list[LedgerRecord] = []

    @property
    def records(self) -> list[LedgerRecord]:
        return list(self._records)

    def find(self, record_id: str) -> Optional[LedgerRecord]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    @property
    def is_federated(self) -> bool:
        return False

    @abstractmethod
    async def refresh(self) -> None:
        """Reload the collection from storage"""
        pass

    @abstractmethod
    async def save(self, record: LedgerRecord, is_new: bool) -> bool:
        """
        Persist a created or edited record

        Returns:
            False when an edited record's id is not in its partition (no-op)
        """
        pass

    @abstractmethod
    async def delete(
        self,
        record_id: str,
        source_module: Optional[str] = None,
        source_tab: Optional[str] = None,
    ) -> bool:
        """
        Hard-delete a record by id

        Returns:
            False when the id is not in the resolved partition (no-op)
        """
        pass

    def _recompute_all(self, records: Sequence[LedgerRecord]) -> list[LedgerRecord]:
        today = self.clock.today()
        return [self.engine.recompute(record, today) for record in records]


class LocalRecordCollection(RecordCollection):
    """
    Non-federated collection over a single partition

    Mutations update the in-memory list and write it back directly; no
    reload is needed afterwards.
    """

    async def refresh(self) -> None:
        self._records = self._recompute_all(await self.partition_repo.read(self.key))

    async def save(self, record: LedgerRecord, is_new: bool) -> bool:
        if is_new:
            self._records.append(record)
        else:
            index = _index_of(self._records, record.id)
            if index is None:
                logger.warning(f"Record {record.id} not found in partition {self.key}; nothing saved")
                return False
            self._records[index] = record

        await self.partition_repo.write_all(self.key, self._records)
        return True

    async def delete(
        self,
        record_id: str,
        source_module: Optional[str] = None,
        source_tab: Optional[str] = None,
    ) -> bool:
        remaining = [r for r in self._records if r.id != record_id]
        if len(remaining) == len(self._records):
            logger.warning(f"Record {record_id} not found in partition {self.key}; nothing deleted")
            return False

        self._records = remaining
        await self.partition_repo.write_all(self.key, self._records)
        return True


class FederatedRecordCollection(RecordCollection):
    """
    Federation Router for a mother view

    Features:
    - Fan-out read of every sibling partition, mother partition last
    - Records tagged with their owning partition (source_module/source_tab)
    - Writes and deletes routed to the owning partition, then a full reload
    - Owners outside the view's partitions are rejected
    - An unreadable partition contributes no records instead of failing the view

    No deduplication: a record stored in two partitions shows up twice.
    """

    def __init__(
        self,
        partition_repo: RecordPartitionRepository,
        key: PartitionKey,
        engine: DerivedFieldEngine,
        clock: Clock,
        siblings: Sequence[PartitionKey],
    ):
        super().__init__(partition_repo, key, engine, clock)
        self.siblings = tuple(siblings)

    @property
    def is_federated(self) -> bool:
        return True

    @property
    def partitions(self) -> tuple[PartitionKey, ...]:
        """Partitions read by refresh(), in read order"""
        return (*self.siblings, self.key)

    async def refresh(self) -> None:
        merged: list[LedgerRecord] = []
        for partition in self.partitions:
            records = self._recompute_all(await self._load_partition(partition))
            merged.extend(_tag(record, partition) for record in records)

        self._records = merged
        logger.info(
            f"Refreshed {self.key}: {len(merged)} records from {len(self.partitions)} partitions"
        )

    async def save(self, record: LedgerRecord, is_new: bool) -> bool:
        owner = self.resolve_owner(record.source_module, record.source_tab)
        record = _tag(record, owner)

        records = await self.partition_repo.read(owner)
        if is_new:
            records.append(record)
        else:
            index = _index_of(records, record.id)
            if index is None:
                logger.warning(f"Record {record.id} not found in partition {owner}; nothing saved")
                return False
            records[index] = record

        # Write must land before the reload so the view reflects it
        await self.partition_repo.write_all(owner, records)
        await self.refresh()
        return True

    async def delete(
        self,
        record_id: str,
        source_module: Optional[str] = None,
        source_tab: Optional[str] = None,
    ) -> bool:
        owner = self.resolve_owner(source_module, source_tab)

        records = await self.partition_repo.read(owner)
        remaining = [r for r in records if r.id != record_id]
        if len(remaining) == len(records):
            logger.warning(f"Record {record_id} not found in partition {owner}; nothing deleted")
            return False

        await self.partition_repo.write_all(owner, remaining)
        await self.refresh()
        return True

    def resolve_owner(self, source_module: Optional[str], source_tab: Optional[str]) -> PartitionKey:
        """
        Tagged partition if any, otherwise the mother partition itself

        Raises:
            RecordValidationError: The tags name a partition this view does not read
        """
        if not (source_module and source_tab):
            return self.key

        owner = PartitionKey(module_id=source_module, tab_id=source_tab)
        if owner not in self.partitions:
            logger.warning(f"Partition {owner} is not part of {self.key}; write rejected")
            raise RecordValidationError(["source_module", "source_tab"])
        return owner

    async def _load_partition(self, partition: PartitionKey) -> list[LedgerRecord]:
        try:
            return await self.partition_repo.load(partition)
        except PartitionReadError as e:
            logger.warning(f"Partition {partition} failed to load while refreshing {self.key}: {e}")
            return []


def open_record_collection(
    partition_repo: RecordPartitionRepository,
    key: PartitionKey,
    registry: FederationRegistry,
    engine: DerivedFieldEngine,
    clock: Clock,
) -> RecordCollection:
    """Federated collection for registered mother views, local otherwise"""
    if registry.is_federated(key):
        return FederatedRecordCollection(
            partition_repo, key, engine, clock, registry.siblings_of(key)
        )
    return LocalRecordCollection(partition_repo, key, engine, clock)


def _tag(record: LedgerRecord, partition: PartitionKey) -> LedgerRecord:
    # Ownership never changes once assigned
    if record.source_module and record.source_tab:
        return record
    return record.model_copy(
        update={"source_module": partition.module_id, "source_tab": partition.tab_id}
    )


def _index_of(records: Sequence[LedgerRecord], record_id: str) -> Optional[int]:
    for index, record in enumerate(records):
        if record.id == record_id:
            return index
    return None
