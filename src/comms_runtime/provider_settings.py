"""Base configuration models shared by every provider.

Each provider subclasses the three models below: provider-wide settings,
per-instance settings and health check options.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from comms_runtime.health import HealthStatus

DEFAULT_INSTANCE = "default"


class ProviderSettings(BaseModel):
    """Provider-wide settings.

    ``instances`` stays raw here; each entry is validated against the
    provider's instance settings type during registration.
    """

    model_config = ConfigDict(extra="forbid")

    enabled: bool = Field(True, description="Register this provider's instances")
    instances: dict[str, dict[str, Any]] = Field(
        default_factory=dict, description="Named instances keyed by instance name"
    )

    @field_validator("instances", mode="before")
    @classmethod
    def normalize_instance_names(cls, v: Any) -> Any:
        if not isinstance(v, dict):
            return v
        normalized: dict[str, Any] = {}
        for name, section in v.items():
            key = str(name).strip().lower()
            if key in normalized:
                raise ValueError(f"Instance name '{name}' collides with another instance as '{key}'")
            normalized[key] = section or {}
        return normalized

    @property
    def is_active(self) -> bool:
        return self.enabled and bool(self.instances)


class ProviderInstanceSettings(BaseModel):
    """Settings for one named instance of a provider."""

    model_config = ConfigDict(extra="forbid")

    health_checks: bool = Field(True, description="Register a health check for this instance")
    health_options: dict[str, Any] = Field(
        default_factory=dict, description="Raw health check options"
    )


class ProviderHealthCheckOptions(BaseModel):
    """Health check options for one instance."""

    model_config = ConfigDict(extra="forbid")

    timeout: float = Field(5.0, gt=0, description="Check timeout in seconds")
    failure_status: HealthStatus = Field(
        HealthStatus.UNHEALTHY, description="Status reported when the check fails"
    )
    tags: list[str] = Field(default_factory=list, description="Extra health check tags")
