"""Application settings loaded from the environment (``DEXLINE_*``) or ``.env``."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_BASE_URL = "https://pokeapi.co/api/v2"

# Comma-separated in the environment: DEXLINE_CHANNELS=foo,bar
CsvList = Annotated[list[str], NoDecode]


class Settings(BaseSettings):
    """Runtime configuration with env var support."""

    model_config = SettingsConfigDict(
        env_prefix="DEXLINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "dexline"
    app_env: str = "development"
    debug: bool = False

    # Catalog
    base_url: str = DEFAULT_BASE_URL
    languages: CsvList = Field(default_factory=lambda: ["en"])
    cache_ttl_seconds: float | None = Field(default=None, gt=0)
    request_timeout: float = Field(default=30, gt=0)
    max_workers: int = Field(default=8, ge=1, le=64)

    # Chat
    command_prefix: str = "!"
    command_name: str = "poke"
    channels: CsvList = Field(default_factory=list)

    # Observability
    log_level: str = "INFO"
    log_json: bool = False

    @field_validator("languages", "channels", mode="before")
    @classmethod
    def _split_csv(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("languages")
    @classmethod
    def _require_language(cls, value: list[str]) -> list[str]:
        cleaned = [tag.strip().lower() for tag in value if tag.strip()]
        if not cleaned:
            msg = "at least one language tag is required"
            raise ValueError(msg)
        return cleaned

    @field_validator("command_name")
    @classmethod
    def _lower_command(cls, value: str) -> str:
        return value.strip().lower()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
