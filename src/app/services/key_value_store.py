"""Key-Value Store Interface

The persistence substrate behind record partitions: opaque string values
under deterministic string keys.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """
    Abstract key-value store

    Implementations:
    - In-memory dict (tests, local runs)
    - SQL table (service deployment)
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Fetch the value stored under a key

        Returns:
            Stored string, or None when the key was never set
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one"""
        pass
