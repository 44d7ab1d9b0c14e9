"""Azure Communication Services email provider registration."""

from typing import Any

from pydantic import EmailStr, Field, SecretStr, field_validator

from comms_runtime.email.base import EmailClient, EmailHealthCheck
from comms_runtime.ledger import FeatureGroup
from comms_runtime.provider_settings import (
    ProviderHealthCheckOptions,
    ProviderInstanceSettings,
    ProviderSettings,
)
from comms_runtime.registration import ServiceProviderRegistrar

REQUIRED_CONNECTION_KEYS = ("endpoint", "accesskey")


def parse_connection_string(value: str) -> dict[str, str]:
    """Split ``endpoint=...;accesskey=...`` into a lowercase-keyed dict."""
    parts: dict[str, str] = {}
    for segment in value.split(";"):
        if not segment.strip():
            continue
        key, sep, val = segment.partition("=")
        if not sep:
            raise ValueError(f"Malformed connection string segment: {key.strip()!r}")
        parts[key.strip().lower()] = val.strip()
    return parts


class AzureEmailSettings(ProviderSettings):
    """Azure Communication Services provider-wide settings."""

    api_version: str = Field("2023-03-31", description="Email REST API version")


class AzureEmailInstanceSettings(ProviderInstanceSettings):
    """One Azure Communication Services resource."""

    connection_string: SecretStr = Field(..., description="ACS connection string")
    sender_address: EmailStr | None = Field(None, description="Verified sender address")

    @field_validator("connection_string")
    @classmethod
    def validate_connection_string(cls, v: SecretStr) -> SecretStr:
        parts = parse_connection_string(v.get_secret_value())
        missing = [key for key in REQUIRED_CONNECTION_KEYS if not parts.get(key)]
        if missing:
            raise ValueError(f"Connection string is missing: {', '.join(missing)}")
        return v


class AzureEmailHealthCheckOptions(ProviderHealthCheckOptions):
    probe_endpoint: bool = Field(False, description="Require an https endpoint")


class AzureEmailClient(EmailClient):
    provider_name = "azure"

    def __init__(
        self,
        instance_name: str,
        settings: AzureEmailSettings,
        instance: AzureEmailInstanceSettings,
    ) -> None:
        super().__init__(instance_name, sender=instance.sender_address)
        parts = parse_connection_string(instance.connection_string.get_secret_value())
        self.endpoint = parts["endpoint"].rstrip("/")
        self.api_version = settings.api_version
        self._access_key = parts["accesskey"]

    def has_credentials(self) -> bool:
        return bool(self.endpoint and self._access_key)

    def describe(self) -> dict[str, Any]:
        return {**super().describe(), "endpoint": self.endpoint, "api_version": self.api_version}


class AzureEmailHealthCheck(EmailHealthCheck):
    client: AzureEmailClient
    options: AzureEmailHealthCheckOptions

    def check(self):
        result = super().check()
        if self.options.probe_endpoint and not self.client.endpoint.startswith("https://"):
            result.status = self.options.failure_status
            result.message = "Endpoint is not https"
        return result


class AzureEmailRegistrar(ServiceProviderRegistrar):
    feature_group = FeatureGroup.EMAIL
    provider_name = "azure"
    service_type = EmailClient

    def client_type(self) -> type:
        return AzureEmailClient

    def create_client(self, name, settings, instance) -> AzureEmailClient:
        return AzureEmailClient(name, settings, instance)

    def create_health_check(self, client, options) -> AzureEmailHealthCheck:
        return AzureEmailHealthCheck(client, options)
