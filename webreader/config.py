"""Application configuration using Pydantic BaseSettings."""

from functools import lru_cache
from typing import Any, Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from webreader.constants import (
    DEFAULT_FETCH_MAX_BYTES,
    DEFAULT_FETCH_TIMEOUT_SECONDS,
    DEFAULT_FETCH_USER_AGENT,
    DEFAULT_GEMINI_MODEL,
    DEFAULT_GOOGLE_CLOUD_LOCATION,
    DEFAULT_MAX_EXTRACT_CHARS,
    DEFAULT_PORT,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        # Load .env first, then .env.local (for local/test overrides)
        # Later files override earlier ones, so .env.local takes precedence
        env_file=[".env", ".env.local"],
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
    )

    # Extraction
    max_extract_chars: int = Field(
        default=DEFAULT_MAX_EXTRACT_CHARS,
        description="Maximum characters of page text sent to the model",
    )

    # Gemini model selection
    gemini_model: str = Field(
        default=DEFAULT_GEMINI_MODEL,
        validation_alias=AliasChoices(
            "gemini_model", "GEMINI_MODEL", "GOOGLE_GENAI_MODEL"
        ),
        description="Gemini model used to answer questions",
    )
    gemini_temperature: float | None = Field(
        default=None, ge=0.0, le=2.0, description="Optional sampling temperature"
    )
    gemini_max_output_tokens: int | None = Field(
        default=None, gt=0, description="Optional cap on generated tokens"
    )

    # Gemini authentication (API key and Vertex AI modes may both be set)
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "gemini_api_key", "GEMINI_API_KEY", "GOOGLE_API_KEY"
        ),
        description="Gemini Developer API key",
    )
    google_genai_use_vertexai: bool = Field(
        default=False, description="Use Vertex AI instead of the Developer API"
    )
    google_cloud_project: str | None = Field(
        default=None, description="Google Cloud project for Vertex AI"
    )
    google_cloud_location: str = Field(
        default=DEFAULT_GOOGLE_CLOUD_LOCATION,
        description="Google Cloud location for Vertex AI",
    )

    # Page fetching
    fetch_timeout_seconds: float = Field(
        default=DEFAULT_FETCH_TIMEOUT_SECONDS,
        gt=0,
        description="Timeout for fetching the target page (seconds)",
    )
    fetch_user_agent: str = Field(
        default=DEFAULT_FETCH_USER_AGENT,
        description="User-Agent header sent when fetching pages",
    )
    fetch_max_bytes: int = Field(
        default=DEFAULT_FETCH_MAX_BYTES,
        gt=0,
        description="Largest page body read when fetching (bytes)",
    )

    # HTTP server
    port: int = Field(default=DEFAULT_PORT, description="Listening port")
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"], description="Allowed CORS origins"
    )

    # Environment
    env: Literal["local", "railway", "prod"] = Field(
        default="local", description="Current environment"
    )
    log_level: str = Field(default="INFO", description="Python logging level")

    # Sentry Configuration
    sentry_dsn: str | None = Field(
        default=None, description="Sentry DSN for error tracking (optional)"
    )
    sentry_traces_sample_rate: float = Field(
        default=1.0, description="Sentry traces sample rate (0.0 to 1.0)"
    )

    # Logfire Configuration
    logfire_token: str | None = Field(
        default=None, description="Pydantic Logfire token for observability"
    )

    @field_validator("max_extract_chars", mode="before")
    @classmethod
    def _default_unless_positive(cls, value: Any) -> int:
        """Fall back to the default when the limit is not a positive integer."""
        if isinstance(value, bool):
            return DEFAULT_MAX_EXTRACT_CHARS
        try:
            parsed = int(value)
        except (TypeError, ValueError):
            return DEFAULT_MAX_EXTRACT_CHARS
        return parsed if parsed > 0 else DEFAULT_MAX_EXTRACT_CHARS


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
