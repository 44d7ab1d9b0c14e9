"""Common base for email provider clients."""

from typing import Any, ClassVar

from comms_runtime.health import HealthCheckResult, HealthStatus
from comms_runtime.provider_settings import ProviderHealthCheckOptions


class EmailClient:
    """A configured handle on one email provider instance.

    Registered keyed by instance name, so ``services.get_service(EmailClient,
    "marketing")`` returns the instance configured under that name whichever
    provider backs it.
    """

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


class EmailHealthCheck:
    """Reports whether an email client holds usable credentials."""

    def __init__(self, client: EmailClient, options: ProviderHealthCheckOptions) -> None:
        self.client = client
        self.options = options

    def check(self) -> HealthCheckResult:
        service = f"{self.client.provider_name}_{self.client.instance_name}"
        if self.client.has_credentials():
            return HealthCheckResult(
                service=service,
                status=HealthStatus.HEALTHY,
                message="Credentials configured",
                details=self.client.describe(),
            )
        return HealthCheckResult(
            service=service,
            status=self.options.failure_status,
            message="Credentials missing or malformed",
            details=self.client.describe(),
        )
