"""Unit tests for RunPromptUseCase against an in-memory database."""

import json

import pytest
from sqlalchemy.exc import OperationalError

from llm_records.application.unit_of_work import UnitOfWork
from llm_records.application.use_cases.run_prompt import RunPromptUseCase
from llm_records.domain.exceptions import (
    LLMRequestError,
    LLMResponseError,
    PersistenceError,
    ValidationProblem,
)
from llm_records.infra.config.settings import Settings
from llm_records.infra.config.system_prompts import SystemPromptConfig
from tests._helpers.fakes import FakeLLMClient

SYSTEM_PROMPT = SystemPromptConfig(
    system_prompt_text="Return JSON records.", model="test-model", version="t"
)


def _use_case(session, llm, **settings_overrides) -> RunPromptUseCase:
    return RunPromptUseCase(
        uow=UnitOfWork(session),
        llm_service=llm,
        settings=Settings(**settings_overrides),
        system_prompt_resolver=lambda settings: SYSTEM_PROMPT,
    )


async def _seed(session, title="Existing", description="Keep me"):
    uow = UnitOfWork(session)
    async with uow:
        await uow.prompts.upsert("old prompt")
        await uow.records.create(title, description)
        await uow.commit()


async def _stored(session):
    uow = UnitOfWork(session)
    async with uow:
        prompt = await uow.prompts.get_latest()
        records = await uow.records.list_all()
        return (
            prompt.text if prompt else None,
            [(r.title, r.description) for r in records],
        )


class TestRunPromptUseCase:
    @pytest.mark.asyncio
    async def test_replaces_records_and_prompt(self, db_session, fake_llm):
        await _seed(db_session)

        result = await _use_case(db_session, fake_llm).execute("  coffee drinks  ")

        assert result.prompt.text == "coffee drinks"
        assert [r.title for r in result.records] == ["Espresso", "Latte"]
        assert result.warnings == []
        assert await _stored(db_session) == (
            "coffee drinks",
            [("Espresso", "Short, strong coffee."), ("Latte", "Espresso with steamed milk.")],
        )

    @pytest.mark.asyncio
    async def test_sends_system_and_trimmed_user_prompt(self, db_session, fake_llm):
        await _use_case(db_session, fake_llm).execute("  tea  ")

        messages, model = fake_llm.calls[0]
        assert model == "test-model"
        assert [m.content for m in messages] == ["Return JSON records.", "tea"]

    @pytest.mark.asyncio
    async def test_empty_prompt_is_rejected_before_llm(self, db_session, fake_llm):
        with pytest.raises(ValidationProblem) as exc_info:
            await _use_case(db_session, fake_llm).execute("   ")

        assert exc_info.value.message == "Prompt cannot be empty"
        assert exc_info.value.fields == {"prompt": "Cannot be empty"}
        assert fake_llm.calls == []

    @pytest.mark.asyncio
    async def test_prompt_over_limit(self, db_session, fake_llm):
        with pytest.raises(ValidationProblem) as exc_info:
            await _use_case(db_session, fake_llm, max_prompt_chars=5).execute("x" * 6)

        assert exc_info.value.message == "Prompt exceeds maximum length of 5 characters"
        assert exc_info.value.fields == {"prompt": "Max 5 chars"}

    @pytest.mark.asyncio
    async def test_prompt_limit_applies_after_trim(self, db_session, fake_llm):
        result = await _use_case(db_session, fake_llm, max_prompt_chars=5).execute(
            "  12345  "
        )

        assert result.prompt.text == "12345"

    @pytest.mark.asyncio
    async def test_llm_failure_keeps_existing_data(self, db_session):
        await _seed(db_session)
        llm = FakeLLMClient(error=RuntimeError("API rate limit exceeded"))

        with pytest.raises(LLMRequestError) as exc_info:
            await _use_case(db_session, llm).execute("anything")

        assert "API rate limit exceeded" in exc_info.value.message
        assert await _stored(db_session) == ("old prompt", [("Existing", "Keep me")])

    @pytest.mark.asyncio
    async def test_invalid_reply_keeps_existing_data(self, db_session):
        await _seed(db_session)
        llm = FakeLLMClient(reply=json.dumps({"records": []}))

        with pytest.raises(LLMResponseError) as exc_info:
            await _use_case(db_session, llm).execute("anything")

        assert exc_info.value.message.startswith("Invalid response from LLM:")
        assert await _stored(db_session) == ("old prompt", [("Existing", "Keep me")])

    @pytest.mark.asyncio
    async def test_guards_are_applied(self, db_session):
        reply = json.dumps(
            {
                "records": [
                    {"title": "abcdefgh", "description": "short"},
                    {"title": "b", "description": "d"},
                    {"title": "c", "description": "d"},
                ]
            }
        )

        result = await _use_case(
            db_session,
            FakeLLMClient(reply=reply),
            max_records_per_run=2,
            max_title_chars=4,
        ).execute("letters")

        assert [r.title for r in result.records] == ["abcd", "b"]
        assert result.warnings == ["1 records dropped (max=2)", "1 fields truncated"]

    @pytest.mark.asyncio
    async def test_database_failure_rolls_back(self, db_session, fake_llm, monkeypatch):
        await _seed(db_session)
        use_case = _use_case(db_session, fake_llm)

        async def broken_upsert(text):
            raise OperationalError("UPDATE prompts", {}, Exception("disk I/O error"))

        monkeypatch.setattr(use_case.uow.prompts, "upsert", broken_upsert)

        with pytest.raises(PersistenceError, match="Failed to save records to database"):
            await use_case.execute("coffee")

        assert await _stored(db_session) == ("old prompt", [("Existing", "Keep me")])
