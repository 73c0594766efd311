"""
FastAPI application entry point for LLM Records.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from llm_records import __version__
from llm_records.api.errors import setup_error_handlers
from llm_records.api.routers import api_router, ui_router
from llm_records.api.schemas import HealthResponse
from llm_records.infra.config.database import Database
from llm_records.infra.config.dependencies import DatabaseDep, SettingsDep
from llm_records.infra.config.logging_config import get_logger, setup_logging
from llm_records.infra.config.settings import get_settings
from llm_records.infra.middleware.request_context import RequestContextMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger = get_logger("app")

    if not settings.openai_api_key:
        logger.warning(
            "config.openai_api_key.missing",
            hint="set OPENAI_API_KEY (e.g. in .env) to enable /api/run",
        )

    database = Database(settings.sqlite_path, echo=settings.debug_sql)
    await database.initialize()
    await database.create_all()
    app.state.database = database

    logger.info(
        "app.startup",
        app_name=settings.app_name,
        environment=settings.environment,
        sqlite_path=settings.sqlite_path,
    )

    yield

    # Shutdown
    await database.close()
    logger.info("app.shutdown", app_name=settings.app_name)


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Generate, store and edit records from a single LLM prompt",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    setup_error_handlers(app)

    app.include_router(api_router)
    app.include_router(ui_router)

    @app.get("/health", response_model=HealthResponse)
    async def health_check(database: DatabaseDep, settings: SettingsDep) -> HealthResponse:
        """Detailed health check endpoint."""
        database_ok = await database.health_check()
        return HealthResponse(
            status="healthy" if database_ok else "degraded",
            service=settings.app_name,
            version=__version__,
            database="ok" if database_ok else "error",
        )

    return app


app = create_app()
