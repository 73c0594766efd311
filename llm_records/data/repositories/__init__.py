from llm_records.data.repositories.prompt_repository import PromptRepository
from llm_records.data.repositories.record_repository import RecordRepository

__all__ = ["PromptRepository", "RecordRepository"]
