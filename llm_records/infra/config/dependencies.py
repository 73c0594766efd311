"""
FastAPI dependency providers for infrastructure.
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from llm_records.application.ports import LLMServicePort
from llm_records.infra.config.database import Database
from llm_records.infra.config.settings import Settings, get_settings
from llm_records.infra.llm import LangChainClient


def get_database(request: Request) -> Database:
    """The database opened by the application lifespan."""
    return request.app.state.database


async def get_db_session(
    database: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    async with database.session() as session:
        yield session


def get_llm_client(settings: Settings = Depends(get_settings)) -> LLMServicePort:
    return LangChainClient(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        timeout=settings.openai_timeout,
        temperature=settings.openai_temperature,
    )


# Type aliases for cleaner dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]
DatabaseDep = Annotated[Database, Depends(get_database)]
DatabaseSession = Annotated[AsyncSession, Depends(get_db_session)]
LLMClientDep = Annotated[LLMServicePort, Depends(get_llm_client)]
