"""
Domain errors.

Each error carries the HTTP status and problem title it is reported with, so
the API layer can render any of them as a problem-details response.
"""

from typing import Dict, Optional

UPSTREAM_PROBLEM_TYPE = "https://errors.local/upstream"


class DomainError(Exception):
    """Base class for errors that map onto a problem-details response."""

    status_code: int = 500
    title: str = "Internal server error"
    problem_type: Optional[str] = None

    def __init__(self, message: str, fields: Optional[Dict[str, str]] = None):
        self.message = message
        self.fields = fields
        super().__init__(self.message)


class BadRequestError(DomainError):
    status_code = 400
    title = "Bad request"


class ValidationProblem(DomainError):
    """Input was well-formed but failed a business rule."""

    status_code = 422
    title = "Validation error"


class RecordNotFoundError(DomainError):
    status_code = 404
    title = "Record not found"

    def __init__(self, record_id: int):
        super().__init__(f"Record with id {record_id} not found")
        self.record_id = record_id


class LLMRequestError(DomainError):
    """The LLM call itself failed (network, auth, API error)."""

    status_code = 502
    title = "LLM request failed"
    problem_type = UPSTREAM_PROBLEM_TYPE


class LLMResponseError(DomainError):
    """The LLM answered, but not with usable records."""

    status_code = 502
    title = "LLM response validation failed"
    problem_type = UPSTREAM_PROBLEM_TYPE


class PersistenceError(DomainError):
    status_code = 500
    title = "Database error"


class InternalServerError(DomainError):
    status_code = 500
    title = "Internal server error"


class SystemPromptConfigError(DomainError):
    status_code = 500
    title = "Configuration error"
