"""
Record CRUD endpoints.

Titles and descriptions are trimmed by the request schemas and cut to the
same limits ``/run`` applies, so hand-edited records obey the same bounds.
"""

from fastapi import APIRouter, status
from sqlalchemy.exc import SQLAlchemyError

from llm_records.api.dependencies import RecordId, UnitOfWorkDep
from llm_records.api.schemas import (
    CreateRecordRequest,
    DeleteResponse,
    RecordOut,
    RecordResponse,
    RecordsResponse,
    UpdateRecordRequest,
)
from llm_records.application.llm_output import truncate_field
from llm_records.domain.exceptions import InternalServerError
from llm_records.infra.config.dependencies import SettingsDep
from llm_records.infra.config.logging_config import bind_context, get_logger

router = APIRouter(prefix="/records", tags=["records"])
log = get_logger("api.records")


@router.get("", response_model=RecordsResponse)
async def list_records(uow: UnitOfWorkDep) -> RecordsResponse:
    async with uow:
        try:
            records = await uow.records.list_all()
        except SQLAlchemyError as exc:
            log.exception("records.list.error", error=str(exc))
            raise InternalServerError("Failed to fetch records") from exc
        return RecordsResponse(records=[RecordOut.model_validate(r) for r in records])


@router.post("", response_model=RecordResponse, status_code=status.HTTP_201_CREATED)
async def create_record(
    payload: CreateRecordRequest,
    uow: UnitOfWorkDep,
    settings: SettingsDep,
) -> RecordResponse:
    title, _ = truncate_field(payload.title, settings.max_title_chars)
    description, _ = truncate_field(payload.description, settings.max_description_chars)

    async with uow:
        try:
            record = await uow.records.create(title, description)
            await uow.commit()
        except SQLAlchemyError as exc:
            log.exception("records.create.error", error=str(exc))
            raise InternalServerError("Failed to create record") from exc
        return RecordResponse(record=RecordOut.model_validate(record))


@router.patch("/{record_id}", response_model=RecordResponse)
async def update_record(
    record_id: RecordId,
    payload: UpdateRecordRequest,
    uow: UnitOfWorkDep,
    settings: SettingsDep,
) -> RecordResponse:
    bind_context(record_id=record_id)
    changes = {}
    if payload.title is not None:
        changes["title"] = truncate_field(payload.title, settings.max_title_chars)[0]
    if payload.description is not None:
        changes["description"] = truncate_field(
            payload.description, settings.max_description_chars
        )[0]

    async with uow:
        try:
            record = await uow.records.update(record_id, **changes)
            await uow.commit()
        except SQLAlchemyError as exc:
            log.exception("records.update.error", error=str(exc))
            raise InternalServerError("Failed to update record") from exc
        return RecordResponse(record=RecordOut.model_validate(record))


@router.delete("/{record_id}", response_model=DeleteResponse)
async def delete_record(record_id: RecordId, uow: UnitOfWorkDep) -> DeleteResponse:
    bind_context(record_id=record_id)
    async with uow:
        try:
            await uow.records.delete(record_id)
            await uow.commit()
        except SQLAlchemyError as exc:
            log.exception("records.delete.error", error=str(exc))
            raise InternalServerError("Failed to delete record") from exc
    return DeleteResponse(ok=True)
