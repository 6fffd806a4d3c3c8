"""
Application configuration using Pydantic Settings.
Loads environment variables and provides type-safe configuration.
"""

from typing import Optional
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from pathlib import Path

# Get the base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    environment: str = Field(default="development", description="Current environment")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Root log level when not in debug mode")

    # Application
    app_title: str = Field(default="CRM Jurídico")
    app_version: str = Field(default="1.0.0")

    # Local persistence
    data_dir: Path = Field(default=BASE_DIR / "data", description="Directory holding the JSON snapshots")
    storage_namespace: str = Field(default="crm", description="Prefix for every persisted collection key")

    # Deadlines
    urgent_task_lookahead_days: int = Field(default=7, ge=0, description="Days ahead counted as urgent")
    suggested_task_default_days: int = Field(default=7, ge=0, description="Due date offset for AI suggestions without a date")

    # AI text analysis
    openai_api_key: Optional[str] = Field(default=None, description="API key for the text analysis service")
    openai_model: str = Field(default="gpt-4o-mini")

    # Postal code lookup
    viacep_base_url: str = Field(default="https://viacep.com.br/ws")
    http_timeout_seconds: float = Field(default=10.0, gt=0)

    @field_validator("storage_namespace", mode="before")
    @classmethod
    def parse_storage_namespace(cls, v):
        """Normalize the storage namespace, falling back to the default."""
        if v is None or not str(v).strip():
            return "crm"
        return str(v).strip()

    @field_validator("log_level", mode="before")
    @classmethod
    def parse_log_level(cls, v):
        """Upper-case the log level name."""
        if not v:
            return "INFO"
        return str(v).strip().upper()

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def collection_key(self, collection: str) -> str:
        """Get the persisted key for an entity collection."""
        return f"{self.storage_namespace}_{collection}"

    def validate_environment(self) -> None:
        """Validate that all required environment variables are set."""
        required_vars = [
            "openai_api_key",
        ]

        missing_vars = []
        for var in required_vars:
            if not getattr(self, var, None):
                missing_vars.append(var.upper())

        if missing_vars:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing_vars)}"
            )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Use this function to get settings throughout the application.
    """
    settings = Settings()

    # Validate environment in production
    if settings.is_production:
        settings.validate_environment()

    return settings
