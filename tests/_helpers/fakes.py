"""Fake LLM client for testing."""

from typing import List, Optional, Tuple

from langchain_core.messages import BaseMessage

from llm_records.application.ports import LLMServicePort


class FakeLLMClient(LLMServicePort):
    """Returns a canned reply (or raises) and remembers every call."""

    def __init__(self, reply: str = "", error: Optional[Exception] = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: List[Tuple[List[BaseMessage], str]] = []

    async def complete_json(self, messages: List[BaseMessage], model: str) -> str:
        self.calls.append((messages, model))
        if self.error is not None:
            raise self.error
        return self.reply
