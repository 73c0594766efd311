from llm_records.infra.llm.langchain_client import (
    LangChainClient,
    LLMClientError,
    build_messages,
)

__all__ = ["LangChainClient", "LLMClientError", "build_messages"]
