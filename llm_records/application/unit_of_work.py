"""
Unit of Work pattern implementation for transaction boundaries.

Both repositories share one session, so everything done inside a single
``async with uow:`` block is committed or rolled back together.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from llm_records.data.repositories import PromptRepository, RecordRepository


class UnitOfWork:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.prompts = PromptRepository(session)
        self.records = RecordRepository(session)
        self._committed = False

    async def __aenter__(self):
        """Enter transaction context."""
        self._committed = False
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Roll back anything not explicitly committed."""
        if exc_type is not None or not self._committed:
            await self.rollback()

    async def commit(self):
        await self.session.commit()
        self._committed = True

    async def rollback(self):
        await self.session.rollback()
