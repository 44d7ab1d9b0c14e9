"""Common base for SMS provider clients."""

from typing import Any, ClassVar

from comms_runtime.health import HealthCheckResult, HealthStatus
from comms_runtime.provider_settings import ProviderHealthCheckOptions


class SmsClient:
    """A configured handle on one SMS provider instance."""

    provider_name: ClassVar[str] = ""

    def __init__(self, instance_name: str, sender: str | None = None) -> None:
        self.instance_name = instance_name
        self.sender = sender

    def has_credentials(self) -> bool:
        raise NotImplementedError

    def describe(self) -> dict[str, Any]:
        return {
            "provider": self.provider_name,
            "instance": self.instance_name,
            "sender": self.sender,
        }

    def __repr__(self) -> str:
        return f"<{type(self).__name__} instance={self.instance_name!r}>"


class SmsHealthCheck:
    """Reports whether an SMS client holds usable credentials."""

    def __init__(self, client: SmsClient, options: ProviderHealthCheckOptions) -> None:
        self.client = client
        self.options = options

    def check(self) -> HealthCheckResult:
        service = f"{self.client.provider_name}_{self.client.instance_name}"
        healthy = self.client.has_credentials()
        return HealthCheckResult(
            service=service,
            status=HealthStatus.HEALTHY if healthy else self.options.failure_status,
            message="Credentials configured" if healthy else "Credentials missing",
            details=self.client.describe(),
        )
