"""
Minimal service container used during application bootstrap.

Stores singleton services (optionally keyed), named option objects and
health check registrations. Factories run lazily on first resolve and
their result is cached.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from comms_runtime.exceptions import (
    DuplicateHealthCheckError,
    DuplicateServiceError,
    ServiceNotFoundError,
)
from comms_runtime.health import HealthCheckRegistration
from comms_runtime.ledger import RegistrationLedger
from comms_runtime.settings import Settings, get_settings

T = TypeVar("T")

_MISSING = object()


@dataclass
class ServiceDescriptor:
    """One service registration."""

    service_type: type
    key: str | None
    factory: Callable[[], Any]
    instance: Any = _MISSING

    def resolve(self) -> Any:
        if self.instance is _MISSING:
            self.instance = self.factory()
        return self.instance


class ServiceCollection:
    """Registry of services, options and health checks."""

    def __init__(self) -> None:
        self._descriptors: list[ServiceDescriptor] = []
        self._options: dict[tuple[type, str | None], Any] = {}
        self._health_checks: dict[str, HealthCheckRegistration] = {}

    def add_singleton(
        self,
        service_type: type,
        instance: Any = None,
        *,
        factory: Callable[[], Any] | None = None,
        key: str | None = None,
    ) -> "ServiceCollection":
        """Register a singleton, either as a ready instance or a factory.

        Keyed registrations must be unique per service type. Unkeyed ones may
        repeat; the most recent wins on resolve.
        """
        if instance is None and factory is None:
            raise ValueError("Either instance or factory is required")
        if key is not None and self._find(service_type, key) is not None:
            raise DuplicateServiceError(service_type, key)

        descriptor = ServiceDescriptor(
            service_type=service_type,
            key=key,
            factory=factory or (lambda: instance),
        )
        if instance is not None:
            descriptor.instance = instance
        self._descriptors.append(descriptor)
        return self

    def configure(self, options_type: type, value: Any, name: str | None = None) -> "ServiceCollection":
        """Bind an options object to its type, optionally under a name."""
        self._options[(options_type, name)] = value
        return self

    def add_health_check(self, registration: HealthCheckRegistration) -> "ServiceCollection":
        if registration.name in self._health_checks:
            raise DuplicateHealthCheckError(registration.name)
        self._health_checks[registration.name] = registration
        return self

    def get_service(self, service_type: type[T], key: str | None = None) -> T:
        descriptor = self._find(service_type, key)
        if descriptor is None:
            raise ServiceNotFoundError(service_type, key)
        return descriptor.resolve()

    def get_services(self, service_type: type[T]) -> list[T]:
        """Resolve every keyed registration of a type, in registration order."""
        return [
            d.resolve()
            for d in self._descriptors
            if d.service_type is service_type and d.key is not None
        ]

    def get_options(self, options_type: type[T], name: str | None = None) -> T:
        try:
            return self._options[(options_type, name)]
        except KeyError:
            raise ServiceNotFoundError(options_type, name) from None

    def has_service(self, service_type: type, key: str | None = None) -> bool:
        return self._find(service_type, key) is not None

    @property
    def health_checks(self) -> list[HealthCheckRegistration]:
        return list(self._health_checks.values())

    @property
    def descriptors(self) -> list[ServiceDescriptor]:
        return list(self._descriptors)

    def _find(self, service_type: type, key: str | None) -> ServiceDescriptor | None:
        for descriptor in reversed(self._descriptors):
            if descriptor.service_type is service_type and descriptor.key == key:
                return descriptor
        return None

    def __len__(self) -> int:
        return len(self._descriptors)


class ApplicationBuilder:
    """Bootstrap-time handle bundling configuration, services and the ledger."""

    def __init__(
        self,
        configuration: Settings | None = None,
        services: ServiceCollection | None = None,
        ledger: RegistrationLedger | None = None,
    ) -> None:
        self.configuration = configuration if configuration is not None else get_settings()
        self.services = services if services is not None else ServiceCollection()
        self.ledger = ledger if ledger is not None else RegistrationLedger()
