from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """Runtime configuration, read from LEDGER_* environment variables or .env."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        case_sensitive=False,
    )

    app_name: str = "Personal Expense API"

    # Async SQLite connection (relative path)
    database_url: str = "sqlite+aiosqlite:///./personal_expense.db"
    echo_sql: bool = False  # set True to log SQL

    log_level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "INFO"
    cors_origins: list[str] = Field(default_factory=list)

    host: str = "127.0.0.1"
    port: int = Field(3000, ge=1, le=65535)

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value


@lru_cache()
def get_settings() -> LedgerSettings:
    return LedgerSettings()
