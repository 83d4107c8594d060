"""Runtime settings, loaded from environment variables and an optional .env file."""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Schema mapper settings (env prefix ``SCHEMA_MAPPER_``)."""

    model_config = SettingsConfigDict(
        env_prefix="SCHEMA_MAPPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Logging level for schema_mapper loggers")

    search_result_limit: int = Field(default=20, ge=1, description="Max results returned by search")
    snippet_context_before: int = Field(default=40, ge=0, description="Characters kept before a match")
    snippet_context_after: int = Field(default=60, ge=0, description="Characters kept after a match")

    preview_string_max: int = Field(default=64, ge=2, description="Max length of a string value preview")
    preview_item_count: int = Field(default=5, ge=1, description="Array items / object keys shown in previews")
    preview_item_chars: int = Field(default=24, ge=1, description="Max chars per string item inside an array preview")

    server_name: str = Field(default="127.0.0.1", description="Gradio bind address")
    server_port: int = Field(default=7860, description="Gradio port")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
