"""Logger configuration modeled with pydantic-settings for type safety."""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import COMPRESS_PAYLOAD_SIZE, LOG_LEVELS, MAX_PAYLOAD_SIZE

# Lambda runtime level names that have no exact counterpart in LOG_LEVELS.
_LEVEL_ALIASES: Dict[str, str] = {
    "trace": "debug",
    "warning": "warn",
    "fatal": "error",
    "critical": "error",
}


class LoggerSettings(BaseSettings):
    """Runtime switches read from ``SG_LOGGER_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SG_LOGGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    log_event: bool = True
    mask: bool = True
    max_size: int = Field(MAX_PAYLOAD_SIZE, ge=0)
    compress_size: int = Field(COMPRESS_PAYLOAD_SIZE, ge=0)
    no_compress: bool = False
    no_skip: bool = False
    log_ts: bool = False
    log_level: str = Field(
        "warn",
        validation_alias=AliasChoices("SG_LOGGER_LOG_LEVEL", "AWS_LAMBDA_LOG_LEVEL"),
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            return "warn"
        level = value.strip().lower()
        level = _LEVEL_ALIASES.get(level, level)
        if level not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {','.join(LOG_LEVELS)}")
        return level

    @property
    def compress_enabled(self) -> bool:
        return not self.no_compress

    @property
    def drop_enabled(self) -> bool:
        return not self.no_skip


@lru_cache(maxsize=1)
def get_settings() -> LoggerSettings:
    """Return singleton settings instance."""
    return LoggerSettings()
