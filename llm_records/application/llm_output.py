"""
Validation and guarding of structured LLM output.

The model is asked for ``{"records": [{"title": ..., "description": ...}]}``.
``parse_and_validate`` turns the raw reply into record drafts and
``apply_guards`` enforces the configured record cap and field lengths.
"""

import json
from dataclasses import dataclass, field
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class LLMOutputError(ValueError):
    """Raised when the reply is not JSON or does not match the records schema."""


class RecordDraft(BaseModel):
    """A record proposed by the LLM, not yet stored."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)


class LLMRecordsPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    records: List[RecordDraft] = Field(..., min_length=1)


@dataclass
class GuardResult:
    records: List[RecordDraft]
    warnings: List[str] = field(default_factory=list)


def _format_errors(exc: ValidationError) -> str:
    return ", ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    )


def parse_and_validate(raw_text: str) -> List[RecordDraft]:
    """Parse the LLM reply and validate it against the records schema.

    Extra top-level keys are rejected; extra keys inside a record are dropped.

    Raises:
        LLMOutputError: if the text is not JSON or fails validation.
    """
    try:
        parsed = json.loads(raw_text)
    except (TypeError, json.JSONDecodeError) as exc:
        raise LLMOutputError(f"Invalid JSON response from LLM: {exc}") from exc

    try:
        payload = LLMRecordsPayload.model_validate(parsed)
    except ValidationError as exc:
        raise LLMOutputError(
            f"LLM response validation failed: {_format_errors(exc)}"
        ) from exc

    return payload.records


def truncate_field(value: str, limit: int) -> Tuple[str, bool]:
    """Cut ``value`` to ``limit`` characters; the flag tells whether it was cut."""
    if len(value) > limit:
        return value[:limit], True
    return value, False


def apply_guards(
    records: List[RecordDraft],
    max_records: int,
    max_title_chars: int,
    max_description_chars: int,
) -> GuardResult:
    """Cap the record count, then truncate over-long fields.

    Warnings are emitted in that order: dropped records first, then the
    number of truncated fields (a record can contribute two).
    """
    warnings: List[str] = []
    kept = list(records)

    if len(kept) > max_records:
        dropped = len(kept) - max_records
        kept = kept[:max_records]
        warnings.append(f"{dropped} records dropped (max={max_records})")

    truncated_count = 0
    guarded: List[RecordDraft] = []
    for record in kept:
        title, title_cut = truncate_field(record.title, max_title_chars)
        description, description_cut = truncate_field(
            record.description, max_description_chars
        )
        truncated_count += int(title_cut) + int(description_cut)
        guarded.append(record.model_copy(update={"title": title, "description": description}))

    if truncated_count > 0:
        warnings.append(f"{truncated_count} fields truncated")

    return GuardResult(records=guarded, warnings=warnings)
