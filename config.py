from __future__ import annotations

import logging

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    DotEnvSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


class SnipStashConfig(BaseSettings):
    """
    Runtime configuration based on Pydantic Settings.

    - reads environment variables and `.env.local` / `.env` automatically
    - converts types and validates ranges up front
    """

    ENVIRONMENT: str = Field(default="production", description="Deployment environment name")

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Minimum log level for structlog/logging")

    # Query engine
    SEARCH_PAGE_SIZE: int = Field(
        default=20,
        ge=1,
        le=1_000,
        description="Default page size for snippet search results",
    )

    # Debounce
    DEBOUNCE_DELAY_MS: int = Field(
        default=300,
        ge=0,
        le=600_000,
        description="Default quiet period (ms) for debounced calls such as live search",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Chain of .env files: .env.local first, then .env, on top of the environment."""
        return (
            init_settings,
            env_settings,
            DotEnvSettingsSource(settings_cls, env_file=".env.local", case_sensitive=True),
            DotEnvSettingsSource(settings_cls, env_file=".env", case_sensitive=True),
            file_secret_settings,
        )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _validate_log_level(cls, v: object) -> str:
        level = str(v or "").strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {v!r}")
        return level


def load_config() -> SnipStashConfig:
    """Load configuration and return a SnipStashConfig instance."""
    return SnipStashConfig()


try:
    config = load_config()
except ValidationError as exc:
    raise ValueError(str(exc)) from exc
