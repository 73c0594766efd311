from llm_records.domain.exceptions import (
    BadRequestError,
    DomainError,
    InternalServerError,
    LLMRequestError,
    LLMResponseError,
    PersistenceError,
    RecordNotFoundError,
    SystemPromptConfigError,
    ValidationProblem,
)

__all__ = [
    "BadRequestError",
    "DomainError",
    "InternalServerError",
    "LLMRequestError",
    "LLMResponseError",
    "PersistenceError",
    "RecordNotFoundError",
    "SystemPromptConfigError",
    "ValidationProblem",
]
