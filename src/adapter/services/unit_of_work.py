"""Unit of Work Implementations"""

from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    Commits the session shared with SqlAlchemyKeyValueStore

    Partition writes are flushed as they happen and become durable here.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()


class InMemoryUnitOfWork(UnitOfWork):
    """Writes to the in-memory store are immediate; nothing to commit"""

    async def commit(self):
        pass

    async def rollback(self):
        pass
