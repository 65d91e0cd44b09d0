"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (NEXTLENS_*) and .env file.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="NEXTLENS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="nextlens", description="Application name")
    app_env: str = Field(default="development", description="Environment (development/production)")
    log_level: str = Field(default="WARNING", description="Logging level")

    # Pipeline
    max_concurrency: int = Field(
        default=16,
        description="Maximum number of files read and parsed concurrently",
    )
    project_config_name: str = Field(
        default=".nextlens.yaml",
        description="Name of the optional per-project config file",
    )

    @field_validator("max_concurrency")
    @classmethod
    def _validate_concurrency(cls, value: int) -> int:
        """Fail fast: a semaphore needs at least one slot."""
        if value < 1:
            raise ValueError("max_concurrency must be at least 1")
        return value

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env.lower() == "production"


# Global settings instance
settings = Settings()
