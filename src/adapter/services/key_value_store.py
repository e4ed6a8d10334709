"""Key-Value Store Implementations

Backends for record partitions: a process-local dict and a SQL table.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.services.key_value_store import KeyValueStore
from src.domain.partition_blob import PartitionBlob


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store; contents live as long as the instance"""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value


class SqlAlchemyKeyValueStore(KeyValueStore):
    """
    SQL implementation of KeyValueStore

    Features:
    - One partition_blobs row per key
    - Writes flushed in the caller's session; the unit of work commits
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, key: str) -> Optional[str]:
        stmt = select(PartitionBlob).where(PartitionBlob.key == key)
        result = await self.session.execute(stmt)
        blob = result.scalar_one_or_none()
        return blob.value if blob else None

    async def set(self, key: str, value: str) -> None:
        blob = await self.session.get(PartitionBlob, key)
        if blob is None:
            blob = PartitionBlob(key=key, value=value)
        else:
            blob.value = value
            blob.updated_at = datetime.utcnow()
        self.session.add(blob)
        await self.session.flush()
