"""Twilio SMS provider registration."""

import re
from typing import Any

from pydantic import Field, SecretStr, field_validator, model_validator

from comms_runtime.ledger import FeatureGroup
from comms_runtime.provider_settings import (
    ProviderHealthCheckOptions,
    ProviderInstanceSettings,
    ProviderSettings,
)
from comms_runtime.registration import ServiceProviderRegistrar
from comms_runtime.sms.base import SmsClient, SmsHealthCheck

E164_PATTERN = re.compile(r"^\+[1-9]\d{1,14}$")


class TwilioSmsSettings(ProviderSettings):
    """Twilio provider-wide settings."""

    base_url: str = Field("https://api.twilio.com", description="Twilio API base URL")


class TwilioSmsInstanceSettings(ProviderInstanceSettings):
    """One Twilio account or subaccount."""

    account_sid: str = Field(..., description="Twilio account SID")
    auth_token: SecretStr = Field(..., description="Twilio auth token")
    from_number: str | None = Field(None, description="Sender phone number in E.164 format")
    messaging_service_sid: str | None = Field(None, description="Messaging service SID")

    @field_validator("account_sid")
    @classmethod
    def validate_account_sid(cls, v: str) -> str:
        if not v.startswith("AC"):
            raise ValueError("Account SID must start with 'AC'")
        return v

    @field_validator("from_number")
    @classmethod
    def validate_from_number(cls, v: str | None) -> str | None:
        if v is not None and not E164_PATTERN.match(v):
            raise ValueError("Sender number must be in E.164 format")
        return v

    @model_validator(mode="after")
    def require_sender(self) -> "TwilioSmsInstanceSettings":
        if not self.from_number and not self.messaging_service_sid:
            raise ValueError("Either from_number or messaging_service_sid is required")
        return self


class TwilioSmsHealthCheckOptions(ProviderHealthCheckOptions):
    check_account_status: bool = Field(False, description="Also query the account status")


class TwilioSmsClient(SmsClient):
    provider_name = "twilio"

    def __init__(
        self,
        instance_name: str,
        settings: TwilioSmsSettings,
        instance: TwilioSmsInstanceSettings,
    ) -> None:
        super().__init__(instance_name, sender=instance.from_number or instance.messaging_service_sid)
        self.base_url = settings.base_url.rstrip("/")
        self.account_sid = instance.account_sid
        self.messaging_service_sid = instance.messaging_service_sid
        self._auth_token = instance.auth_token

    def has_credentials(self) -> bool:
        return bool(self.account_sid and self._auth_token.get_secret_value())

    @property
    def account_url(self) -> str:
        return f"{self.base_url}/2010-04-01/Accounts/{self.account_sid}.json"

    def describe(self) -> dict[str, Any]:
        return {**super().describe(), "account_sid": self.account_sid}


class TwilioSmsHealthCheck(SmsHealthCheck):
    client: TwilioSmsClient
    options: TwilioSmsHealthCheckOptions

    def check(self):
        result = super().check()
        if self.options.check_account_status:
            # Polling the account endpoint is left to the host's health runner
            result.details = {**(result.details or {}), "account_url": self.client.account_url}
        return result


class TwilioSmsRegistrar(ServiceProviderRegistrar):
    feature_group = FeatureGroup.SMS
    provider_name = "twilio"
    service_type = SmsClient

    def client_type(self) -> type:
        return TwilioSmsClient

    def create_client(self, name, settings, instance) -> TwilioSmsClient:
        return TwilioSmsClient(name, settings, instance)

    def create_health_check(self, client, options) -> TwilioSmsHealthCheck:
        return TwilioSmsHealthCheck(client, options)
