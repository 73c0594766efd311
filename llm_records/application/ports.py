"""
Application ports - abstract interfaces for external dependencies.
"""

from abc import ABC, abstractmethod
from typing import List

from langchain_core.messages import BaseMessage


class LLMServicePort(ABC):
    """Abstract interface for the chat-completion backend used by ``/run``."""

    @abstractmethod
    async def complete_json(self, messages: List[BaseMessage], model: str) -> str:
        """Send messages in JSON-object mode and return the raw reply text."""
        pass
