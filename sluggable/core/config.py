"""Library settings with environment validation."""

from pathlib import Path
import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_ENV_FILE = Path.cwd() / ".env"


class Settings(BaseSettings):
    """Settings loaded from ``SLUGGABLE_*`` environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_prefix="SLUGGABLE_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    # --- Hook defaults ---
    DUPLICATE_MESSAGE: str = Field("is already taken", min_length=1)
    ID_FIELD: str = Field("id", min_length=1)

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown LOG_LEVEL: {value!r}")
        return level

    @field_validator("ID_FIELD")
    @classmethod
    def validate_id_field(cls, value: str) -> str:
        value = value.strip()
        if not value.isidentifier():
            raise ValueError("ID_FIELD must be a valid attribute name.")
        return value


settings = Settings()
