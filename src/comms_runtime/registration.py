"""
Idempotent provider registration.

A feature group (email, sms) is enabled from a fixed, ordered list of
``ProviderBinding`` records. ``enable_feature_group`` marks the group in the
builder's ledger and runs each binding's registrar once; later calls for the
same group return the builder untouched.

Registrars decide from configuration whether their provider is active. A
provider is wired when its section exists, ``enabled`` is true and at least
one instance is declared. Errors are never caught here: a malformed section
aborts bootstrap and bindings made before the failure stay in the container.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from functools import partial
from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ValidationError

from comms_runtime.container import ApplicationBuilder, ServiceCollection
from comms_runtime.exceptions import ProviderConfigurationError
from comms_runtime.health import HealthCheck, HealthCheckRegistration
from comms_runtime.ledger import FeatureGroup, RegistrationLedger, group_key
from comms_runtime.logging import get_logger
from comms_runtime.provider_settings import (
    DEFAULT_INSTANCE,
    ProviderHealthCheckOptions,
    ProviderInstanceSettings,
    ProviderSettings,
)

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


class ServiceProviderRegistrar(ABC):
    """Wires one provider's instances into a service collection.

    Subclasses name their feature group, provider and the group-level
    service type, and know how to build a client and its health check.
    """

    feature_group: ClassVar[FeatureGroup]
    provider_name: ClassVar[str]
    service_type: ClassVar[type]

    @abstractmethod
    def create_client(
        self, name: str, settings: ProviderSettings, instance: ProviderInstanceSettings
    ) -> Any:
        """Build the client object for one instance."""

    @abstractmethod
    def create_health_check(
        self, client: Any, options: ProviderHealthCheckOptions
    ) -> HealthCheck:
        """Build the health check for one instance's client."""

    def register(
        self,
        builder: ApplicationBuilder,
        settings_type: type[ProviderSettings],
        instance_settings_type: type[ProviderInstanceSettings],
        health_check_options_type: type[ProviderHealthCheckOptions],
    ) -> int:
        """Register every configured instance. Returns the number wired."""
        section = builder.configuration.communications.provider_section(
            self.feature_group.value, self.provider_name
        )
        if section is None:
            logger.debug(
                "Provider not configured",
                group=self.feature_group.value,
                provider=self.provider_name,
            )
            return 0

        settings = self.load(settings_type, section)
        if not settings.is_active:
            logger.info(
                "Provider disabled",
                group=self.feature_group.value,
                provider=self.provider_name,
                enabled=settings.enabled,
                instances=len(settings.instances),
            )
            return 0

        builder.services.configure(settings_type, settings, name=self.provider_name)

        sole_instance = len(settings.instances) == 1
        for name, raw in settings.instances.items():
            instance = self.load(instance_settings_type, raw, instance=name)
            self.register_instance(
                builder.services,
                name,
                settings,
                instance,
                health_check_options_type,
                as_default=sole_instance,
            )

        return len(settings.instances)

    def register_instance(
        self,
        services: ServiceCollection,
        name: str,
        settings: ProviderSettings,
        instance: ProviderInstanceSettings,
        health_check_options_type: type[ProviderHealthCheckOptions],
        as_default: bool = False,
    ) -> None:
        services.configure(type(instance), instance, name=name)
        services.add_singleton(
            self.service_type,
            factory=partial(self.create_client, name, settings, instance),
            key=name,
        )
        resolve = partial(services.get_service, self.service_type, name)

        # Concrete lookups share the group-level singleton
        client_type = self.client_type()
        if client_type is not None and client_type is not self.service_type:
            services.add_singleton(client_type, factory=resolve, key=name)

        # An explicit "default" instance always wins; a sole instance only
        # claims the slot while it is free
        if name == DEFAULT_INSTANCE or (as_default and not services.has_service(self.service_type)):
            services.add_singleton(self.service_type, factory=resolve)

        logger.info(
            "Provider instance registered",
            group=self.feature_group.value,
            provider=self.provider_name,
            instance=name,
        )

        if not instance.health_checks:
            return

        options = self.load(health_check_options_type, instance.health_options, instance=name)
        services.configure(health_check_options_type, options, name=name)
        services.add_health_check(
            HealthCheckRegistration(
                name=f"{self.provider_name}_{name}",
                factory=lambda: self.create_health_check(resolve(), options),
                tags=(self.feature_group.value, self.provider_name, *options.tags),
                timeout=options.timeout,
                failure_status=options.failure_status,
                metadata={"instance": name},
            )
        )
        logger.debug("Health check registered", provider=self.provider_name, instance=name)

    def client_type(self) -> type | None:
        """Concrete client class, also registered keyed when it differs."""
        return None

    def load(self, model: type[M], data: Any, instance: str | None = None) -> M:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise ProviderConfigurationError(
                self.provider_name,
                f"{exc.error_count()} validation error(s) for {model.__name__}",
                instance=instance,
                errors=exc.errors(include_url=False, include_input=False),
            ) from exc


@dataclass(frozen=True)
class ProviderBinding:
    """A provider registrar paired with its three configuration types."""

    registrar: type[ServiceProviderRegistrar]
    settings_type: type[ProviderSettings]
    instance_settings_type: type[ProviderInstanceSettings]
    health_check_options_type: type[ProviderHealthCheckOptions]

    @property
    def provider_name(self) -> str:
        return self.registrar.provider_name


def register_service_provider(
    builder: ApplicationBuilder, binding: ProviderBinding
) -> ApplicationBuilder:
    """Run one binding's registrar against the builder."""
    registrar = binding.registrar()
    registrar.register(
        builder,
        binding.settings_type,
        binding.instance_settings_type,
        binding.health_check_options_type,
    )
    return builder


def enable_feature_group(
    builder: ApplicationBuilder,
    group: FeatureGroup | str,
    bindings: Iterable[ProviderBinding],
) -> ApplicationBuilder:
    """Register a feature group's providers at most once per ledger.

    Bindings run in the given order. The group is marked before any
    registrar runs, so a failing registrar still leaves it marked.
    """
    if not builder.ledger.try_mark(group):
        logger.debug("Feature group already registered", group=group_key(group))
        return builder

    bindings = list(bindings)
    for binding in bindings:
        register_service_provider(builder, binding)

    logger.info(
        "Feature group registered",
        group=group_key(group),
        providers=[binding.provider_name for binding in bindings],
    )
    return builder


__all__ = [
    "FeatureGroup",
    "ProviderBinding",
    "RegistrationLedger",
    "ServiceProviderRegistrar",
    "enable_feature_group",
    "register_service_provider",
]
