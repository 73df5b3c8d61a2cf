"""
Strongly typed configuration using pydantic-settings.

All settings are validated at startup and loaded from:
1. Default values defined here
2. .env file (if present)
3. Environment variables (highest priority)

Environment variable naming:
- StorageSettings: WAGERBOOK_DATA_DIR, WAGERBOOK_HISTORY_FILE, etc.
- ObservabilitySettings: ENVIRONMENT, LOG_LEVEL (no prefix)
"""
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path


class StorageSettings(BaseSettings):
    """Where the ledger lives on disk."""

    model_config = SettingsConfigDict(env_prefix="WAGERBOOK_")

    data_dir: Path = Field(default=Path("data"), description="Directory holding ledger files")
    history_file: str = Field(default="bet_history_v1.json", description="Ledger file name")
    create_backup: bool = Field(default=True, description="Keep a .bak copy during saves")

    @field_validator("history_file")
    @classmethod
    def history_file_is_plain_name(cls, v):
        if not v or Path(v).name != v:
            raise ValueError("history_file must be a plain file name")
        return v


class ObservabilitySettings(BaseSettings):
    """Logging and metrics settings."""

    model_config = SettingsConfigDict(env_prefix="")  # Direct: ENVIRONMENT, LOG_LEVEL

    environment: str = Field(default="development", pattern="^(development|staging|production)$")
    log_level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    log_format: str = Field(default="console", pattern="^(console|json)$")


class Settings(BaseSettings):
    """
    Root settings aggregating all subsections.

    Usage:
        from wagerbook.config import settings

        settings.storage.data_dir
        settings.history_path
        settings.observability.log_level
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    storage: StorageSettings = Field(default_factory=StorageSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @property
    def history_path(self) -> Path:
        return self.storage.data_dir / self.storage.history_file
