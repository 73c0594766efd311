"""
Stored prompt endpoint.
"""

from fastapi import APIRouter
from sqlalchemy.exc import SQLAlchemyError

from llm_records.api.dependencies import UnitOfWorkDep
from llm_records.api.schemas import PromptOut, PromptResponse
from llm_records.domain.exceptions import InternalServerError
from llm_records.infra.config.logging_config import get_logger

router = APIRouter(prefix="/prompt", tags=["prompt"])
log = get_logger("api.prompt")


@router.get("", response_model=PromptResponse)
async def get_prompt(uow: UnitOfWorkDep) -> PromptResponse:
    """Return the prompt of the last successful run, or null."""
    async with uow:
        try:
            prompt = await uow.prompts.get_latest()
        except SQLAlchemyError as exc:
            log.exception("prompt.get.error", error=str(exc))
            raise InternalServerError("Failed to fetch prompt") from exc
        return PromptResponse(prompt=PromptOut.model_validate(prompt) if prompt else None)
