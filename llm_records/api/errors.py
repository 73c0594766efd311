"""
API error handling and exception mapping.

Every error leaves the service as an RFC 7807 problem-details body with
media type ``application/problem+json``.
"""

import random
import re
import string
from http import HTTPStatus
from typing import Dict, Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from llm_records.api.schemas import ProblemDetails
from llm_records.domain.exceptions import DomainError
from llm_records.infra.config.logging_config import get_logger

PROBLEM_MEDIA_TYPE = "application/problem+json"
PROBLEM_TYPE_BASE = "https://errors.local/"
_ERROR_ID_ALPHABET = string.ascii_lowercase + string.digits

log = get_logger("api.errors")


def generate_error_id() -> str:
    """Short random id to correlate a response with server logs."""
    return "".join(random.choices(_ERROR_ID_ALPHABET, k=6))


def problem_type_for(title: str) -> str:
    return PROBLEM_TYPE_BASE + re.sub(r"\s+", "-", title.lower())


def problem(
    status_code: int,
    title: str,
    detail: str,
    fields: Optional[Dict[str, str]] = None,
    type_: Optional[str] = None,
) -> JSONResponse:
    """Build a problem-details response."""
    body = ProblemDetails(
        type=type_ or problem_type_for(title),
        title=title,
        status=status_code,
        detail=detail,
        error_id=generate_error_id(),
        fields=fields,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
        media_type=PROBLEM_MEDIA_TYPE,
    )


# Exception handler functions
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    response = problem(
        exc.status_code, exc.title, exc.message, fields=exc.fields, type_=exc.problem_type
    )
    log_method = log.error if exc.status_code >= 500 else log.warning
    log_method(
        "error.domain",
        error=type(exc).__name__,
        status_code=exc.status_code,
        detail=exc.message,
    )
    return response


def _field_errors(exc: RequestValidationError) -> Dict[str, str]:
    fields: Dict[str, str] = {}
    for error in exc.errors():
        location = error.get("loc", ())
        # ("body",) alone means a model-level error
        key = str(location[-1]) if len(location) > 1 else "general"
        fields.setdefault(key, error.get("msg", "Invalid value"))
    return fields


def _is_unreadable_body(error) -> bool:
    # An empty body surfaces as the whole body missing
    if error.get("type") == "missing" and tuple(error.get("loc", ())) == ("body",):
        return True
    return error.get("type") == "json_invalid"


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    A body that is empty or cannot be decoded is a 400; anything else is a
    422 with the failing fields listed.
    """
    if any(_is_unreadable_body(error) for error in exc.errors()):
        log.warning("error.request.invalid_json")
        return problem(
            status.HTTP_400_BAD_REQUEST, "Bad request", "Invalid JSON in request body"
        )

    fields = _field_errors(exc)
    log.warning("error.request.validation", fields=fields)
    return problem(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Validation error",
        "Invalid request data",
        fields=fields,
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    try:
        title = HTTPStatus(exc.status_code).phrase
    except ValueError:
        title = "HTTP error"
    log.warning("error.http", status_code=exc.status_code, detail=str(exc.detail))
    response = problem(exc.status_code, title, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("error.unhandled", error=type(exc).__name__)
    return problem(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        "An unexpected error occurred",
    )


def setup_error_handlers(app) -> None:
    """
    Setup error handlers for the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
