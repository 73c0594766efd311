"""
API dependencies for dependency injection.
"""

from typing import Annotated

from fastapi import Depends, Path

from llm_records.application.unit_of_work import UnitOfWork
from llm_records.application.use_cases.run_prompt import RunPromptUseCase
from llm_records.domain.exceptions import BadRequestError, RecordNotFoundError
from llm_records.infra.config.dependencies import (
    DatabaseSession,
    LLMClientDep,
    SettingsDep,
)

SQLITE_MAX_INTEGER = 2**63 - 1


async def get_unit_of_work(session: DatabaseSession) -> UnitOfWork:
    return UnitOfWork(session)


UnitOfWorkDep = Annotated[UnitOfWork, Depends(get_unit_of_work)]


async def get_run_prompt_use_case(
    uow: UnitOfWorkDep,
    llm_client: LLMClientDep,
    settings: SettingsDep,
) -> RunPromptUseCase:
    return RunPromptUseCase(uow=uow, llm_service=llm_client, settings=settings)


def get_record_id(record_id: str = Path(...)) -> int:
    """
    Parse the ``{record_id}`` path segment.

    Raises:
        BadRequestError: unless the segment is a positive integer
        RecordNotFoundError: if it is beyond SQLite's integer range
    """
    try:
        parsed = int(record_id)
    except ValueError:
        raise BadRequestError("Invalid record ID") from None
    if parsed <= 0:
        raise BadRequestError("Invalid record ID")
    # SQLite cannot bind it, so no row can have this id
    if parsed > SQLITE_MAX_INTEGER:
        raise RecordNotFoundError(parsed)
    return parsed


RunPromptUseCaseDep = Annotated[RunPromptUseCase, Depends(get_run_prompt_use_case)]
RecordId = Annotated[int, Depends(get_record_id)]
