"""
LangChain/OpenAI chat client.

Infrastructure only: it sends messages and returns text. Prompts and the
interpretation of the reply live in the application layer.
"""

from typing import List, Optional

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_core.output_parsers import StrOutputParser
from langchain_openai import ChatOpenAI

from llm_records.application.ports import LLMServicePort
from llm_records.infra.config.logging_config import get_logger

JSON_OBJECT_FORMAT = {"type": "json_object"}


class LLMClientError(RuntimeError):
    """The client cannot make the request at all (e.g. no API key)."""


def build_messages(system_prompt: str, user_prompt: str) -> List[BaseMessage]:
    """System instruction followed by the user's prompt."""
    return [
        SystemMessage(content=system_prompt),
        HumanMessage(content=user_prompt),
    ]


class LangChainClient(LLMServicePort):
    def __init__(
        self,
        api_key: Optional[str],
        base_url: Optional[str] = None,
        timeout: float = 60.0,
        temperature: Optional[float] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.temperature = temperature
        self._text_parser = StrOutputParser()
        self._log = get_logger("infra.llm")

    def _build_llm(self, model: str):
        llm_kwargs = {
            "model": model,
            "api_key": self.api_key,
            "timeout": self.timeout,
            "max_retries": 0,
        }
        if self.temperature is not None:
            llm_kwargs["temperature"] = self.temperature
        # OpenAI-compatible servers
        if self.base_url:
            llm_kwargs["base_url"] = self.base_url

        return ChatOpenAI(**llm_kwargs).bind(response_format=JSON_OBJECT_FORMAT)

    async def complete_json(self, messages: List[BaseMessage], model: str) -> str:
        """
        Invoke the chat completions API in JSON-object mode.

        Args:
            messages: System and user messages
            model: Model name, e.g. "gpt-5-nano"

        Returns:
            The assistant message text ("" if the reply had no content)
        """
        if not self.api_key:
            raise LLMClientError("OPENAI_API_KEY environment variable is required")

        chain = self._build_llm(model) | self._text_parser
        text = await chain.ainvoke(messages)
        self._log.info("llm.invoke.json", model=model, chars=len(text or ""))
        return text or ""
