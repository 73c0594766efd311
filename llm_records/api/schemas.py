"""
Request and response schemas for the JSON API.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


def _require_text(value: Optional[str], message: str) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise PydanticCustomError("empty_text", message)
    return value


# ---------- STORED ENTITIES ----------
# Serialised with camelCase keys (createdAt, updatedAt)
ENTITY_CONFIG = ConfigDict(
    from_attributes=True, alias_generator=to_camel, populate_by_name=True
)


class PromptOut(BaseModel):
    model_config = ENTITY_CONFIG

    id: int
    text: str
    created_at: int = Field(..., description="Epoch milliseconds")
    updated_at: int = Field(..., description="Epoch milliseconds")


class RecordOut(BaseModel):
    model_config = ENTITY_CONFIG

    id: int
    title: str
    description: str
    created_at: int = Field(..., description="Epoch milliseconds")
    updated_at: int = Field(..., description="Epoch milliseconds")


# ---------- REQUESTS ----------
class CreateRecordRequest(BaseModel):
    title: str
    description: str

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        return _require_text(value, "Title cannot be empty")

    @field_validator("description")
    @classmethod
    def _description_not_blank(cls, value: str) -> str:
        return _require_text(value, "Description cannot be empty")


class UpdateRecordRequest(BaseModel):
    """Partial update; at least one field must be present."""

    title: Optional[str] = None
    description: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: Optional[str]) -> Optional[str]:
        return _require_text(value, "Title cannot be empty")

    @field_validator("description")
    @classmethod
    def _description_not_blank(cls, value: Optional[str]) -> Optional[str]:
        return _require_text(value, "Description cannot be empty")

    @model_validator(mode="after")
    def _at_least_one_field(self) -> "UpdateRecordRequest":
        if self.title is None and self.description is None:
            raise PydanticCustomError(
                "missing_update",
                "At least one field (title or description) must be provided",
            )
        return self


class RunRequest(BaseModel):
    prompt: str


# ---------- RESPONSES ----------
class PromptResponse(BaseModel):
    prompt: Optional[PromptOut]


class RecordsResponse(BaseModel):
    records: List[RecordOut]


class RecordResponse(BaseModel):
    record: RecordOut


class DeleteResponse(BaseModel):
    ok: bool = True


class RunMeta(BaseModel):
    warnings: List[str] = Field(default_factory=list)


class RunResponse(BaseModel):
    prompt: PromptOut
    records: List[RecordOut]
    meta: RunMeta


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    database: str


class ProblemDetails(BaseModel):
    """RFC 7807 error body."""

    model_config = ConfigDict(populate_by_name=True)

    type: str
    title: str
    status: int
    detail: str
    error_id: str = Field(..., alias="errorId")
    fields: Optional[Dict[str, str]] = None
