from llm_records.data.models.base import Base, now_ms
from llm_records.data.models.prompt_model import PromptModel
from llm_records.data.models.record_model import RecordModel

__all__ = ["Base", "PromptModel", "RecordModel", "now_ms"]
