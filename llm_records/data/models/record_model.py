"""
SQLAlchemy model for generated or user-entered records.
"""

from sqlalchemy import Column, Integer, Text

from llm_records.data.models.base import Base


class RecordModel(Base):
    __tablename__ = "records"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    created_at = Column(Integer, nullable=False)
    updated_at = Column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<RecordModel id={self.id} title={self.title!r}>"
