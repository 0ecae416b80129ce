"""Configuration management for the Get IP API."""
from functools import lru_cache
from pydantic import AliasChoices, Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # API Configuration
    app_name: str = Field(default="get-ip-api")
    debug: bool = Field(default=False)

    # Server Configuration
    host: str = Field(default="localhost")
    port: int = Field(default=3000)
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("environment", "NODE_ENV"),
    )

    # Public IP fallback Configuration
    enable_fallback: bool = Field(default=True)
    fallback_timeout: float = Field(default=3.0, gt=0)

    @computed_field
    @property
    def debug_enabled(self) -> bool:
        """Whether the diagnostic /debug endpoint is served."""
        return self.debug or self.environment == "development"

    @property
    def log_level(self) -> str:
        """Verbose logging in development, INFO elsewhere."""
        return "DEBUG" if self.environment == "development" else "INFO"

    model_config = SettingsConfigDict(
        env_file=None,  # Don't load from .env file
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    """Get the settings instance, built once per process."""
    return Settings()
