"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # iTunes Search Configuration
    itunes_search_url: str = Field(
        default="https://itunes.apple.com/search", description="iTunes search endpoint"
    )
    itunes_media: str = Field(default="movie", description="Media type filter for searches")
    itunes_search_limit: int = Field(
        default=100, description="Maximum number of results requested per search"
    )
    itunes_timeout: float = Field(
        default=5.0, description="HTTP timeout in seconds (httpx default)"
    )

    # Search Session Configuration
    default_keyword: str = Field(default="holiday", description="Keyword for the default search")
    preload_default_search: bool = Field(
        default=False, description="Run the default search on startup"
    )

    # Application Configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=8000, description="Port to run the server on")
    log_level: str = Field(default="INFO", description="Logging level")

    # Feature Flags
    enable_telemetry: bool = Field(default=True, description="Enable PostHog telemetry")

    # PostHog Configuration
    posthog_api_key: str | None = Field(None, description="PostHog API key for telemetry")
    posthog_host: str = Field(default="https://us.i.posthog.com", description="PostHog host URL")

    # Sentry Configuration
    sentry_dsn: str | None = Field(None, description="Sentry DSN for error tracking")

    # Application Metadata
    app_name: str = Field(default="Movie-Search", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
