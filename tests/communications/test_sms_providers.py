"""Tests for Twilio SMS provider wiring."""

import pytest
from pydantic import ValidationError

from comms_runtime.container import ApplicationBuilder
from comms_runtime.exceptions import ProviderConfigurationError
from comms_runtime.health import HealthStatus
from comms_runtime.hosting import add_sms_services
from comms_runtime.sms import SmsClient, TwilioSmsClient, TwilioSmsInstanceSettings

pytestmark = pytest.mark.unit


class TestTwilioInstanceSettings:
    def test_valid_settings(self):
        settings = TwilioSmsInstanceSettings(
            account_sid="AC123", auth_token="t", messaging_service_sid="MG123"
        )

        assert settings.from_number is None
        assert settings.health_checks is True

    @pytest.mark.parametrize(
        "overrides",
        [
            {"account_sid": "XX123"},
            {"from_number": "5005550006"},
            {"from_number": None},
        ],
    )
    def test_invalid_settings(self, overrides):
        data = {"account_sid": "AC123", "auth_token": "t", "from_number": "+15005550006"}
        data.update(overrides)

        with pytest.raises(ValidationError):
            TwilioSmsInstanceSettings(**data)


class TestTwilioRegistration:
    def test_client_registered_keyed_and_default(self, settings_factory, twilio_section):
        builder = add_sms_services(
            ApplicationBuilder(settings_factory(sms={"twilio": twilio_section}))
        )

        client = builder.services.get_service(SmsClient, "alerts")

        assert isinstance(client, TwilioSmsClient)
        assert builder.services.get_service(SmsClient) is client
        assert builder.services.get_service(TwilioSmsClient, "alerts") is client
        assert client.sender == "+15005550006"
        assert client.account_url == "https://api.twilio.com/2010-04-01/Accounts/AC1234567890.json"

    def test_malformed_instance_fails(self, settings_factory):
        section = {"instances": {"alerts": {"account_sid": "AC1", "auth_token": "t"}}}
        builder = ApplicationBuilder(settings_factory(sms={"twilio": section}))

        with pytest.raises(ProviderConfigurationError) as exc_info:
            add_sms_services(builder)

        assert exc_info.value.instance == "alerts"

    def test_health_check_reports_account_url(self, settings_factory, twilio_section):
        twilio_section["instances"]["alerts"]["health_options"] = {
            "check_account_status": True,
            "tags": ["paging"],
        }
        builder = add_sms_services(
            ApplicationBuilder(settings_factory(sms={"twilio": twilio_section}))
        )

        (registration,) = builder.services.health_checks
        result = registration.create().check()

        assert registration.tags == ("sms", "twilio", "paging")
        assert result.status == HealthStatus.HEALTHY
        assert result.details["account_url"].endswith("/Accounts/AC1234567890.json")

    def test_disabled_provider(self, settings_factory, twilio_section):
        twilio_section["enabled"] = False
        builder = add_sms_services(
            ApplicationBuilder(settings_factory(sms={"twilio": twilio_section}))
        )

        assert builder.services.get_services(SmsClient) == []
