"""Centralized configuration using pydantic-settings.

All configuration is loaded from environment variables and .env files.
Provider sections live under ``communications.<group>.providers.<name>``,
for example::

    COMMUNICATIONS__EMAIL__PROVIDERS__SENDGRID__INSTANCES__DEFAULT__API_KEY=SG.xxx
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class FeatureGroupSettings(BaseModel):
    """Provider sections for one feature group, keyed by provider name."""

    providers: dict[str, dict[str, Any]] = Field(
        default_factory=dict, description="Raw provider sections"
    )

    @field_validator("providers", mode="before")
    @classmethod
    def normalize_provider_names(cls, v: Any) -> Any:
        if not isinstance(v, dict):
            return v
        normalized: dict[str, Any] = {}
        for name, section in v.items():
            key = str(name).lower()
            if key in normalized:
                raise ValueError(f"Provider name '{name}' collides with another provider as '{key}'")
            normalized[key] = section
        return normalized


class CommunicationsSettings(BaseModel):
    """Email and SMS provider configuration."""

    email: FeatureGroupSettings = FeatureGroupSettings()
    sms: FeatureGroupSettings = FeatureGroupSettings()

    def provider_section(self, group: str, provider: str) -> dict[str, Any] | None:
        """Return the raw section for a provider, or None when absent."""
        group_settings = getattr(self, str(group).lower(), None)
        if not isinstance(group_settings, FeatureGroupSettings):
            return None
        return group_settings.providers.get(provider.lower())


class Settings(BaseSettings):
    """Main application settings.

    All settings can be overridden via environment variables.
    For nested settings, use double underscore: OBSERVABILITY__LOG_FORMAT=text
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )

    app_name: str = Field("comms-runtime", description="Application name")
    environment: Environment = Field(Environment.DEVELOPMENT, description="Deployment environment")
    debug: bool = Field(False, description="Debug mode")

    # ============================================================
    # Observability
    # ============================================================

    class ObservabilitySettings(BaseModel):
        """Logging configuration."""

        log_level: LogLevel = Field(LogLevel.INFO, description="Log level")
        log_format: str = Field("json", description="Log format (json or text)")
        enable_correlation_ids: bool = Field(True, description="Add thread name to log events")

    observability: ObservabilitySettings = ObservabilitySettings()  # type: ignore[call-arg]

    # ============================================================
    # Communications providers
    # ============================================================

    communications: CommunicationsSettings = CommunicationsSettings()

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v: Any) -> Any:
        """Validate environment."""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == Environment.PRODUCTION


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get global settings instance (singleton)."""
    global _settings
    if _settings is None:
        _settings = Settings()  # type: ignore
    return _settings


def reset_settings() -> None:
    """Reset settings (mainly for testing)."""
    global _settings
    _settings = None
