"""
Run a user prompt through the LLM and replace the stored records.

Nothing is written until the reply has been validated and guarded, so a
failed run leaves the previous prompt and records untouched.
"""

from dataclasses import dataclass, field
from typing import Callable, List

from sqlalchemy.exc import SQLAlchemyError

from llm_records.application.llm_output import (
    LLMOutputError,
    apply_guards,
    parse_and_validate,
)
from llm_records.application.ports import LLMServicePort
from llm_records.application.unit_of_work import UnitOfWork
from llm_records.data.models import PromptModel, RecordModel
from llm_records.domain.exceptions import (
    LLMRequestError,
    LLMResponseError,
    PersistenceError,
    ValidationProblem,
)
from llm_records.infra.config.logging_config import get_logger
from llm_records.infra.config.settings import Settings
from llm_records.infra.config.system_prompts import (
    SystemPromptConfig,
    get_system_prompt_config,
)
from llm_records.infra.llm import build_messages


@dataclass
class RunResult:
    prompt: PromptModel
    records: List[RecordModel]
    warnings: List[str] = field(default_factory=list)


class RunPromptUseCase:
    def __init__(
        self,
        uow: UnitOfWork,
        llm_service: LLMServicePort,
        settings: Settings,
        system_prompt_resolver: Callable[[Settings], SystemPromptConfig] = get_system_prompt_config,
    ):
        self.uow = uow
        self.llm_service = llm_service
        self.settings = settings
        self._resolve_system_prompt = system_prompt_resolver
        self._log = get_logger("usecase.run_prompt")

    def _validate_prompt(self, prompt: str) -> str:
        text = prompt.strip()
        limit = self.settings.max_prompt_chars

        if not text:
            raise ValidationProblem(
                "Prompt cannot be empty", fields={"prompt": "Cannot be empty"}
            )
        if len(text) > limit:
            raise ValidationProblem(
                f"Prompt exceeds maximum length of {limit} characters",
                fields={"prompt": f"Max {limit} chars"},
            )
        return text

    async def execute(self, prompt: str) -> RunResult:
        text = self._validate_prompt(prompt)

        config = self._resolve_system_prompt(self.settings)
        messages = build_messages(config.system_prompt_text, text)
        self._log.info("run.start", model=config.model, prompt_chars=len(text))

        try:
            raw = await self.llm_service.complete_json(messages, config.model)
        except Exception as exc:
            self._log.warning("run.llm.failed", error=str(exc))
            raise LLMRequestError(f"OpenAI error: {exc}") from exc

        try:
            drafts = parse_and_validate(raw)
        except LLMOutputError as exc:
            self._log.warning("run.llm.invalid_response", error=str(exc))
            raise LLMResponseError(f"Invalid response from LLM: {exc}") from exc

        guarded = apply_guards(
            drafts,
            max_records=self.settings.max_records_per_run,
            max_title_chars=self.settings.max_title_chars,
            max_description_chars=self.settings.max_description_chars,
        )

        try:
            async with self.uow:
                await self.uow.records.truncate()
                stored_prompt = await self.uow.prompts.upsert(text)
                stored_records = [
                    await self.uow.records.create(draft.title, draft.description)
                    for draft in guarded.records
                ]
                await self.uow.commit()
        except SQLAlchemyError as exc:
            self._log.error("run.persist.failed", error=str(exc))
            raise PersistenceError("Failed to save records to database") from exc

        self._log.info(
            "run.complete",
            records=len(stored_records),
            warnings=len(guarded.warnings),
        )
        return RunResult(
            prompt=stored_prompt,
            records=stored_records,
            warnings=guarded.warnings,
        )
