"""Tests for the bootstrap service container."""

import pytest

from comms_runtime.container import ApplicationBuilder, ServiceCollection
from comms_runtime.exceptions import (
    DuplicateHealthCheckError,
    DuplicateServiceError,
    ServiceNotFoundError,
)
from comms_runtime.health import HealthCheckRegistration
from comms_runtime.ledger import RegistrationLedger
from comms_runtime.settings import Settings

pytestmark = pytest.mark.unit


class _Service:
    pass


class TestServiceCollection:
    @pytest.fixture
    def services(self):
        return ServiceCollection()

    def test_add_and_resolve_instance(self, services):
        service = _Service()
        services.add_singleton(_Service, service)

        assert services.get_service(_Service) is service
        assert services.has_service(_Service)

    def test_factory_is_lazy_and_cached(self, services):
        created = []

        def factory():
            created.append(_Service())
            return created[-1]

        services.add_singleton(_Service, factory=factory, key="a")
        assert created == []

        assert services.get_service(_Service, "a") is services.get_service(_Service, "a")
        assert len(created) == 1

    def test_requires_instance_or_factory(self, services):
        with pytest.raises(ValueError):
            services.add_singleton(_Service)

    def test_missing_service(self, services):
        with pytest.raises(ServiceNotFoundError) as exc_info:
            services.get_service(_Service, "missing")

        assert exc_info.value.key == "missing"
        assert "_Service" in str(exc_info.value)
        assert isinstance(exc_info.value, LookupError)

    def test_duplicate_keyed_service(self, services):
        services.add_singleton(_Service, _Service(), key="a")

        with pytest.raises(DuplicateServiceError):
            services.add_singleton(_Service, _Service(), key="a")

    def test_unkeyed_registration_last_wins(self, services):
        first, second = _Service(), _Service()
        services.add_singleton(_Service, first)
        services.add_singleton(_Service, second)

        assert services.get_service(_Service) is second
        assert len(services) == 2

    def test_get_services_returns_keyed_in_order(self, services):
        a, b = _Service(), _Service()
        services.add_singleton(_Service, a, key="a")
        services.add_singleton(_Service, _Service())
        services.add_singleton(_Service, b, key="b")

        assert services.get_services(_Service) == [a, b]

    def test_named_options(self, services):
        services.configure(dict, {"x": 1}, name="one")
        services.configure(dict, {"x": 2})

        assert services.get_options(dict, name="one") == {"x": 1}
        assert services.get_options(dict) == {"x": 2}
        with pytest.raises(ServiceNotFoundError):
            services.get_options(dict, name="two")

    def test_duplicate_health_check(self, services):
        services.add_health_check(HealthCheckRegistration(name="x", factory=object))

        with pytest.raises(DuplicateHealthCheckError):
            services.add_health_check(HealthCheckRegistration(name="x", factory=object))

    def test_methods_chain(self, services):
        result = services.add_singleton(_Service, _Service()).configure(dict, {})

        assert result is services


class TestApplicationBuilder:
    def test_defaults(self):
        settings = Settings(_env_file=None)
        builder = ApplicationBuilder(settings)

        assert builder.configuration is settings
        assert isinstance(builder.services, ServiceCollection)
        assert isinstance(builder.ledger, RegistrationLedger)

    def test_injected_collaborators(self):
        services = ServiceCollection()
        ledger = RegistrationLedger()

        builder = ApplicationBuilder(Settings(_env_file=None), services=services, ledger=ledger)

        assert builder.services is services
        assert builder.ledger is ledger

    def test_fresh_ledger_per_builder(self):
        assert ApplicationBuilder().ledger is not ApplicationBuilder().ledger
