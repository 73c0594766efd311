"""Global test configuration and fixtures."""

import json
import os
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

REPO_ROOT = Path(__file__).resolve().parent.parent

# Set test environment before the application module is imported
os.environ["ENVIRONMENT"] = "testing"
os.environ["SQLITE_PATH"] = ":memory:"
os.environ["OPENAI_API_KEY"] = "test-openai-key"
os.environ["SYSTEM_PROMPTS_PATH"] = str(REPO_ROOT / "config" / "system-prompts.json")
os.environ["LOG_FORMAT"] = "console"
os.environ["LOG_LEVEL"] = "WARNING"

from llm_records.infra.config.database import Database  # noqa: E402
from llm_records.infra.config.dependencies import get_llm_client  # noqa: E402
from llm_records.infra.config.settings import get_settings  # noqa: E402
from llm_records.infra.config.system_prompts import reset_system_prompt_cache  # noqa: E402
from tests._helpers.fakes import FakeLLMClient  # noqa: E402

GUARD_ENV_VARS = (
    "MAX_RECORDS_PER_RUN",
    "MAX_PROMPT_CHARS",
    "MAX_TITLE_CHARS",
    "MAX_DESCRIPTION_CHARS",
    "OPENAI_MODEL",
    "OPENAI_TEMPERATURE",
    "SYSTEM_PROMPT_INDEX",
)


@pytest.fixture(autouse=True)
def fresh_configuration(monkeypatch):
    """Every test starts from default limits and re-reads the environment."""
    for name in GUARD_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    reset_system_prompt_cache()
    yield
    get_settings.cache_clear()
    reset_system_prompt_cache()


@pytest.fixture
def llm_reply():
    """A well-formed LLM reply with two records."""
    return json.dumps(
        {
            "records": [
                {"title": "Espresso", "description": "Short, strong coffee."},
                {"title": "Latte", "description": "Espresso with steamed milk."},
            ]
        }
    )


@pytest.fixture
def fake_llm(llm_reply) -> FakeLLMClient:
    return FakeLLMClient(reply=llm_reply)


@pytest.fixture
def system_prompts_file(tmp_path) -> Path:
    path = tmp_path / "system-prompts.json"
    path.write_text(
        json.dumps(
            [
                {
                    "version": "0.1",
                    "title": "Test prompt",
                    "model": "test-model",
                    "prompt": "Return records as JSON.",
                },
                {
                    "version": "0.2",
                    "title": "Alternate prompt",
                    "model": "alt-model",
                    "prompt": "Alternate instructions.",
                },
            ]
        ),
        encoding="utf-8",
    )
    return path


# ---------- DATABASE FIXTURES ----------


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[Database, None]:
    db = Database(":memory:")
    await db.initialize()
    await db.create_all()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def db_session(database) -> AsyncGenerator[AsyncSession, None]:
    async with database.session() as session:
        yield session


# ---------- API TESTING FIXTURES ----------


@pytest.fixture
def app(fake_llm):
    """Fresh application with the LLM replaced by a fake."""
    from llm_records.main import create_app

    application = create_app()
    application.dependency_overrides[get_llm_client] = lambda: fake_llm
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Test client; entering it runs the lifespan (fresh in-memory database)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def create_record(client):
    def _create(title: str = "Title", description: str = "Description") -> dict:
        response = client.post(
            "/api/records", json={"title": title, "description": description}
        )
        assert response.status_code == 201, response.text
        return response.json()["record"]

    return _create
