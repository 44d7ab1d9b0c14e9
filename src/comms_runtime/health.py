"""Health check registrations for communications providers.

Only the registration side lives here. Running the checks on a schedule is
left to the hosting application.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol


class HealthStatus(str, Enum):
    """Health status of a provider instance."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"
    UNKNOWN = "unknown"


@dataclass
class HealthCheckResult:
    """Result of a health check."""

    service: str
    status: HealthStatus
    message: str
    details: dict[str, Any] | None = None


class HealthCheck(Protocol):
    def check(self) -> HealthCheckResult: ...


@dataclass
class HealthCheckRegistration:
    """A named health check waiting to be built by the host."""

    name: str
    factory: Callable[[], HealthCheck]
    tags: tuple[str, ...] = ()
    timeout: float = 5.0
    failure_status: HealthStatus = HealthStatus.UNHEALTHY
    metadata: dict[str, Any] = field(default_factory=dict)

    def create(self) -> HealthCheck:
        return self.factory()
