"""
SQLAlchemy model for the stored prompt.
"""

from sqlalchemy import Column, Integer, Text

from llm_records.data.models.base import Base


class PromptModel(Base):
    __tablename__ = "prompts"

    # Only one row (id = 1) is ever written
    id = Column(Integer, primary_key=True)
    text = Column(Text, nullable=False)
    created_at = Column(Integer, nullable=False)
    updated_at = Column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<PromptModel id={self.id} updated_at={self.updated_at}>"
