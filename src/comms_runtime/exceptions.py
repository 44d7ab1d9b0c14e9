"""
Communications runtime exceptions.

Errors raised while wiring providers into the service container. None of
these are caught on the registration path: they propagate to the bootstrap
caller, which is expected to abort startup.
"""

from typing import Any


class CommunicationsError(Exception):
    """Base exception for the communications runtime."""


class ProviderConfigurationError(CommunicationsError):
    """Raised when a provider's configuration section is malformed.

    Attributes:
        provider: Provider name (e.g. ``sendgrid``)
        instance: Instance name, or None for provider-wide settings
        errors: Validation error details, if any
    """

    def __init__(
        self,
        provider: str,
        message: str,
        instance: str | None = None,
        errors: list[dict[str, Any]] | None = None,
    ):
        self.provider = provider
        self.instance = instance
        self.errors = errors or []
        location = f"{provider}.{instance}" if instance else provider
        super().__init__(f"Invalid configuration for '{location}': {message}")


class ContainerError(CommunicationsError):
    """Base exception for service container operations."""


class ServiceNotFoundError(ContainerError, LookupError):
    """Raised when resolving a service that was never registered."""

    def __init__(self, service_type: type, key: str | None = None):
        self.service_type = service_type
        self.key = key
        name = getattr(service_type, "__name__", str(service_type))
        suffix = f" with key '{key}'" if key is not None else ""
        super().__init__(f"No service registered for {name}{suffix}")


class DuplicateServiceError(ContainerError):
    """Raised when a keyed service is registered twice."""

    def __init__(self, service_type: type, key: str):
        self.service_type = service_type
        self.key = key
        name = getattr(service_type, "__name__", str(service_type))
        super().__init__(f"Service {name} already registered with key '{key}'")


class DuplicateHealthCheckError(ContainerError):
    """Raised when two health checks share a name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Health check '{name}' is already registered")
