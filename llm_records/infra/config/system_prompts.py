"""
System prompt catalogue.

``config/system-prompts.json`` holds a non-empty list of prompt variants;
``SYSTEM_PROMPT_INDEX`` picks one and ``OPENAI_MODEL`` (when set) overrides
the model it names.
"""

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Annotated, List, Optional

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from llm_records.domain.exceptions import SystemPromptConfigError
from llm_records.infra.config.logging_config import get_logger
from llm_records.infra.config.settings import Settings

log = get_logger("infra.system_prompts")


class SystemPrompt(BaseModel):
    version: str
    title: str
    model: str
    prompt: str


_catalogue_adapter = TypeAdapter(Annotated[List[SystemPrompt], Field(min_length=1)])


@dataclass(frozen=True)
class SystemPromptConfig:
    system_prompt_text: str
    model: str
    version: str


def load_system_prompts(path: Path) -> List[SystemPrompt]:
    """Read and validate the catalogue file."""
    try:
        parsed = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise SystemPromptConfigError(f"Failed to load system prompts: {exc}") from exc

    try:
        return _catalogue_adapter.validate_python(parsed)
    except ValidationError as exc:
        issues = ", ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise SystemPromptConfigError(
            f"Invalid system prompts configuration: {issues}"
        ) from exc


@lru_cache(maxsize=8)
def _resolve(path: str, index: int, model_override: Optional[str]) -> SystemPromptConfig:
    prompts = load_system_prompts(Path(path))

    if index >= len(prompts):
        raise SystemPromptConfigError(
            f"SYSTEM_PROMPT_INDEX ({index}) is out of range. "
            f"Available prompts: 0-{len(prompts) - 1}"
        )

    selected = prompts[index]
    config = SystemPromptConfig(
        system_prompt_text=selected.prompt,
        model=model_override or selected.model,
        version=selected.version,
    )
    log.info("system_prompt.loaded", index=index, version=selected.version, model=config.model)
    return config


def get_system_prompt_config(settings: Settings) -> SystemPromptConfig:
    """Resolve the active system prompt and model (cached per settings)."""
    return _resolve(
        settings.system_prompts_path,
        settings.system_prompt_index,
        settings.openai_model,
    )


def reset_system_prompt_cache() -> None:
    _resolve.cache_clear()
