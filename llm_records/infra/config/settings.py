"""
Application configuration settings.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = Field("LLM Records", alias="APP_NAME")
    environment: str = Field("development", alias="ENVIRONMENT")
    debug: bool = Field(False, alias="DEBUG")

    # Server
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(8000, alias="PORT")

    # Database
    sqlite_path: str = Field("./data/app.db", alias="SQLITE_PATH")
    debug_sql: bool = Field(False, alias="DATABASE_ECHO")

    # OpenAI/LLM
    openai_api_key: Optional[str] = Field(None, alias="OPENAI_API_KEY")
    openai_model: Optional[str] = Field(None, alias="OPENAI_MODEL")
    openai_base_url: Optional[str] = Field(None, alias="OPENAI_BASE_URL")
    openai_timeout: float = Field(60.0, alias="OPENAI_TIMEOUT")
    # Unset sends no temperature; some models reject anything but their default
    openai_temperature: Optional[float] = Field(None, alias="OPENAI_TEMPERATURE")

    # System prompt catalogue
    system_prompts_path: str = Field(
        "config/system-prompts.json", alias="SYSTEM_PROMPTS_PATH"
    )
    system_prompt_index: int = Field(0, ge=0, alias="SYSTEM_PROMPT_INDEX")

    # Guards
    max_records_per_run: int = Field(50, ge=1, alias="MAX_RECORDS_PER_RUN")
    max_prompt_chars: int = Field(2000, ge=1, alias="MAX_PROMPT_CHARS")
    max_title_chars: int = Field(200, ge=1, alias="MAX_TITLE_CHARS")
    max_description_chars: int = Field(2000, ge=1, alias="MAX_DESCRIPTION_CHARS")

    # Logging
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_format: str = Field("json", alias="LOG_FORMAT")

    # CORS
    cors_origins: str = Field("*", alias="CORS_ORIGINS")

    def get_cors_origins(self) -> list[str]:
        """Parse CORS origins from string."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get settings instance (cached; call ``get_settings.cache_clear()`` to reload)."""
    return Settings()
