"""Configuration management using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from tlsposture.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Configuration
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000)

    # Probe Configuration
    default_port: int = Field(default=443, ge=1, le=65535)
    probe_timeout: float = Field(default=8.0, ge=1, le=60)
    evaluation_timeout: float | None = Field(
        default=None,
        ge=1,
        le=600,
        description="Overall deadline for one evaluation. Defaults to 4x probe_timeout, at least dns_timeout + probe_timeout.",
    )
    dns_timeout: float = Field(default=5.0, ge=1, le=60)
    http_timeout: float = Field(default=10.0, ge=1, le=120)

    # Optional collectors
    cipher_enumeration_enabled: bool = Field(default=True)
    cipher_enumeration_concurrency: int = Field(default=4, ge=1, le=32)
    hsts_check_enabled: bool = Field(default=True)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO"
    )
    log_format: Literal["json", "text"] = Field(default="json")

    # CORS Configuration (set CORS_ORIGINS env var, comma-separated)
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"],
        description="Allowed CORS origins. Set to ['*'] for development only.",
    )
    cors_allow_credentials: bool = Field(default=True)

    @model_validator(mode="after")
    def _check_deadline(self) -> "Settings":
        minimum = self.dns_timeout + self.probe_timeout
        if self.evaluation_timeout is not None and self.evaluation_timeout < minimum:
            raise ValueError(
                "evaluation_timeout must cover dns_timeout + probe_timeout"
            )
        return self

    def get_evaluation_timeout(self) -> float:
        """Get the overall evaluation deadline in seconds."""
        if self.evaluation_timeout is not None:
            return self.evaluation_timeout
        return max(self.probe_timeout * 4, self.dns_timeout + self.probe_timeout)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    try:
        return Settings()
    except PydanticValidationError as e:
        raise ConfigurationError(
            "Invalid configuration",
            details={"errors": e.errors(include_url=False)},
        ) from e
