"""SendGrid email provider registration."""

from typing import Any

from pydantic import EmailStr, Field, SecretStr

from comms_runtime.email.base import EmailClient, EmailHealthCheck
from comms_runtime.ledger import FeatureGroup
from comms_runtime.provider_settings import (
    ProviderHealthCheckOptions,
    ProviderInstanceSettings,
    ProviderSettings,
)
from comms_runtime.registration import ServiceProviderRegistrar

SENDGRID_API_KEY_PREFIX = "SG."


class SendGridEmailSettings(ProviderSettings):
    """SendGrid provider-wide settings."""

    base_url: str = Field("https://api.sendgrid.com", description="SendGrid API base URL")
    sandbox_mode: bool = Field(False, description="Enable SendGrid sandbox mode")


class SendGridEmailInstanceSettings(ProviderInstanceSettings):
    """One SendGrid account."""

    api_key: SecretStr = Field(..., description="SendGrid API key")
    from_address: EmailStr | None = Field(None, description="Default from email")
    from_name: str | None = Field(None, description="Default from name")


class SendGridEmailHealthCheckOptions(ProviderHealthCheckOptions):
    verify_api_key: bool = Field(True, description="Require the SG. key prefix")


class SendGridEmailClient(EmailClient):
    provider_name = "sendgrid"

    def __init__(
        self,
        instance_name: str,
        settings: SendGridEmailSettings,
        instance: SendGridEmailInstanceSettings,
    ) -> None:
        super().__init__(instance_name, sender=instance.from_address)
        self.base_url = settings.base_url.rstrip("/")
        self.sandbox_mode = settings.sandbox_mode
        self.from_name = instance.from_name
        self._api_key = instance.api_key

    def has_credentials(self) -> bool:
        return bool(self._api_key.get_secret_value())

    def has_valid_key_format(self) -> bool:
        return self._api_key.get_secret_value().startswith(SENDGRID_API_KEY_PREFIX)

    def describe(self) -> dict[str, Any]:
        return {**super().describe(), "base_url": self.base_url, "sandbox_mode": self.sandbox_mode}


class SendGridEmailHealthCheck(EmailHealthCheck):
    client: SendGridEmailClient
    options: SendGridEmailHealthCheckOptions

    def check(self):
        result = super().check()
        if self.options.verify_api_key and not self.client.has_valid_key_format():
            result.status = self.options.failure_status
            result.message = "API key does not look like a SendGrid key"
        return result


class SendGridEmailRegistrar(ServiceProviderRegistrar):
    feature_group = FeatureGroup.EMAIL
    provider_name = "sendgrid"
    service_type = EmailClient

    def client_type(self) -> type:
        return SendGridEmailClient

    def create_client(self, name, settings, instance) -> SendGridEmailClient:
        return SendGridEmailClient(name, settings, instance)

    def create_health_check(self, client, options) -> SendGridEmailHealthCheck:
        return SendGridEmailHealthCheck(client, options)
