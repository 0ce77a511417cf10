# src/app/settings.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.enums import FinalizePolicy

# Compute project root: repo/ (two levels up from this file: repo/src/app/settings.py)
PROJECT_ROOT = Path(__file__).resolve().parents[2]
DATA_DIR = PROJECT_ROOT / "data"
DEFAULT_DB = DATA_DIR / "store.db"


class StoreSettings(BaseSettings):
    """
    Configuration for opening and finalizing store scopes.

    Sources (highest precedence first):
      1. Environment variables (prefixed with APP_, e.g. APP_DB_PATH)
      2. .env file at data/.env
      3. Defaults below
    """

    model_config = SettingsConfigDict(
        env_file=str(DATA_DIR / ".env"),
        env_prefix="APP_",
        extra="ignore",
    )

    # Store
    db_path: Path = Field(default=DEFAULT_DB, description="SQLite DB path")
    finalize_policy: FinalizePolicy = Field(
        default=FinalizePolicy.ROLLBACK_ON_ERROR,
        description="What scope exit does after the body raised",
    )
    create_dirs: bool = Field(
        default=False, description="Create missing parent directories when opening a store"
    )
    timeout: float = Field(default=30.0, description="sqlite3 connect timeout (seconds)")
    journal_mode: Literal["DELETE", "TRUNCATE", "PERSIST", "MEMORY", "WAL", "OFF"] = Field(
        default="WAL", description="PRAGMA journal_mode for file-backed stores"
    )
    foreign_keys: bool = Field(default=True, description="Enforce foreign key constraints")
    begin_mode: Literal["DEFERRED", "IMMEDIATE", "EXCLUSIVE"] = Field(
        default="DEFERRED", description="BEGIN variant issued when a scope opens"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_file: Path | None = Field(default=None, description="Log file path")

    # --- Validators / normalizers ---
    @field_validator("db_path", "log_file", mode="before")
    @classmethod
    def _expand_user_and_env(cls, v):
        if isinstance(v, str | Path):
            return Path(str(v)).expanduser()
        return v

    @field_validator("finalize_policy", mode="before")
    @classmethod
    def _parse_policy(cls, v):
        return FinalizePolicy.from_any(v)

    @field_validator("journal_mode", "begin_mode", mode="before")
    @classmethod
    def _upper_journal_mode(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v


@lru_cache(maxsize=1)
def get_settings() -> StoreSettings:
    """
    Cached accessor for entry points (scripts). Library code takes a
    StoreSettings argument instead of reaching for this.
    """
    return StoreSettings()


if __name__ == "__main__":
    s = get_settings()
    print("PROJECT_ROOT:", PROJECT_ROOT)
    print("db_path:", s.db_path)
    print("finalize_policy:", s.finalize_policy.label)
    print("create_dirs:", s.create_dirs)
    print("journal_mode:", s.journal_mode)
    print("log_level:", s.log_level, "log_file:", s.log_file)
