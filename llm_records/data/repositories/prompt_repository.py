"""
Prompt repository for data access operations.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from llm_records.data.models import PromptModel, now_ms
from llm_records.infra.config.logging_config import get_logger

PROMPT_ID = 1


class PromptRepository:
    def __init__(self, session: AsyncSession):
        self.session = session
        self._log = get_logger("repo.prompt")

    async def get_latest(self) -> Optional[PromptModel]:
        """Get the stored prompt, or None if nothing has been run yet."""
        result = await self.session.execute(
            select(PromptModel).where(PromptModel.id == PROMPT_ID).limit(1)
        )
        return result.scalar_one_or_none()

    async def upsert(self, text: str) -> PromptModel:
        """Replace the prompt text, creating the row on first use."""
        now = now_ms()
        prompt = await self.get_latest()

        if prompt is None:
            prompt = PromptModel(id=PROMPT_ID, text=text, created_at=now, updated_at=now)
            self.session.add(prompt)
            self._log.info("prompt.create", chars=len(text))
        else:
            prompt.text = text
            prompt.updated_at = now
            self._log.info("prompt.update", chars=len(text))

        await self.session.flush()
        return prompt
