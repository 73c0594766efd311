"""
Record repository for data access operations.
"""

from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from llm_records.data.models import RecordModel, now_ms
from llm_records.domain.exceptions import RecordNotFoundError
from llm_records.infra.config.logging_config import get_logger


class RecordRepository:
    def __init__(self, session: AsyncSession):
        self.session = session
        self._log = get_logger("repo.record")

    async def list_all(self) -> List[RecordModel]:
        """Get all records in insertion order."""
        result = await self.session.execute(select(RecordModel).order_by(RecordModel.id))
        records = list(result.scalars().all())
        self._log.debug("record.list", count=len(records))
        return records

    async def create(self, title: str, description: str) -> RecordModel:
        """Create a new record."""
        now = now_ms()
        record = RecordModel(
            title=title,
            description=description,
            created_at=now,
            updated_at=now,
        )
        self.session.add(record)
        await self.session.flush()  # Get the ID without committing

        self._log.info("record.create", record_id=record.id)
        return record

    async def update(
        self,
        record_id: int,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> RecordModel:
        """Patch a record; fields left as None keep their value."""
        record = await self.session.get(RecordModel, record_id)
        if record is None:
            self._log.info("record.update.not_found", record_id=record_id)
            raise RecordNotFoundError(record_id)

        if title is not None:
            record.title = title
        if description is not None:
            record.description = description
        record.updated_at = now_ms()

        await self.session.flush()
        self._log.info("record.update", record_id=record_id)
        return record

    async def delete(self, record_id: int) -> None:
        """Delete a record."""
        result = await self.session.execute(
            delete(RecordModel).where(RecordModel.id == record_id)
        )
        if result.rowcount == 0:
            self._log.info("record.delete.not_found", record_id=record_id)
            raise RecordNotFoundError(record_id)
        self._log.info("record.delete", record_id=record_id)

    async def truncate(self) -> int:
        """Delete every record; returns how many were removed."""
        result = await self.session.execute(delete(RecordModel))
        self._log.info("record.truncate", deleted=result.rowcount)
        return result.rowcount
