"""Configuration from environment (PROXYHASH_* variables)."""

from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Store and logging settings from env."""

    model_config = SettingsConfigDict(env_prefix="PROXYHASH_", extra="ignore")

    # Store
    store_backend: Literal["sqlite", "memory"] = "sqlite"
    db_path: Path = Path("proxyhash.db")
    # SQLite journal mode; WAL lets readers run while a batch commits
    journal_mode: str = "WAL"
    # overwrite = last flush wins; if_absent = keep the first committed value
    put_behaviour: Literal["overwrite", "if_absent"] = "overwrite"
    read_only: bool = False

    # Logging (empty log_file = stderr only; level DEBUG|INFO|WARNING|ERROR)
    log_level: str = "INFO"
    log_file: str = ""

    @field_validator("journal_mode")
    @classmethod
    def _check_journal_mode(cls, v: str) -> str:
        mode = v.strip().upper()
        if mode not in ("DELETE", "TRUNCATE", "PERSIST", "MEMORY", "WAL", "OFF"):
            raise ValueError(f"Unsupported SQLite journal mode: {v!r}")
        return mode

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unsupported log level: {v!r}")
        return level


def get_settings() -> Settings:
    """Return settings."""
    return Settings()
