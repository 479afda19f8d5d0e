"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEVELOPMENT = "development"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Populated once at startup and handed to ``create_app``; request
    handlers never read the environment themselves.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = "Container API"
    version: str = "1.0.0"
    # NODE_ENV is accepted for images built from the old Express setup
    environment: str = Field(
        default="production",
        validation_alias=AliasChoices("ENVIRONMENT", "NODE_ENV"),
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Logging
    log_level: str = "INFO"

    @property
    def is_development(self) -> bool:
        """Verbose error bodies are only returned in development."""
        return self.environment == DEVELOPMENT


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
