"""Record Partition Repository Interface

Defines the contract for reading and replacing the contents of one ledger
partition.
"""

import logging
from abc import ABC, abstractmethod
from typing import Sequence
from src.domain.errors import PartitionReadError
from src.domain.ledger_record import LedgerRecord
from src.domain.partition import PartitionKey

logger = logging.getLogger(__name__)


class RecordPartitionRepository(ABC):
    """
    Repository interface for partitioned LedgerRecord persistence

    A partition is addressed by (module_id, tab_id). It exists once it has
    been written; reading one that never was yields no records.
    """

    @abstractmethod
    async def load(self, key: PartitionKey) -> list[LedgerRecord]:
        """
        Load a partition, reporting unreadable data

        Args:
            key: Partition address

        Returns:
            Records in stored order (empty if never written)

        Raises:
            PartitionReadError: Stored data could not be parsed
        """
        pass

    @abstractmethod
    async def write_all(self, key: PartitionKey, records: Sequence[LedgerRecord]) -> None:
        """
        Replace the entire partition contents

        Args:
            key: Partition address
            records: New contents, in order
        """
        pass

    async def read(self, key: PartitionKey) -> list[LedgerRecord]:
        """
        Load a partition, degrading unreadable data to an empty partition

        Never raises for corrupt data; a warning is logged instead.
        """
        try:
            return await self.load(key)
        except PartitionReadError as e:
            logger.warning(f"Treating partition {key} as empty: {e}")
            return []
