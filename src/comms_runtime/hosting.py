"""
Bootstrap entry points for communications providers.

Both functions are safe to call any number of times; only the first call per
builder does any work. They return the builder so bootstrap steps can chain::

    builder = ApplicationBuilder()
    add_sms_services(add_email_services(builder))
"""

from comms_runtime.container import ApplicationBuilder
from comms_runtime.email import (
    AzureEmailHealthCheckOptions,
    AzureEmailInstanceSettings,
    AzureEmailRegistrar,
    AzureEmailSettings,
    SendGridEmailHealthCheckOptions,
    SendGridEmailInstanceSettings,
    SendGridEmailRegistrar,
    SendGridEmailSettings,
)
from comms_runtime.ledger import FeatureGroup
from comms_runtime.registration import ProviderBinding, enable_feature_group
from comms_runtime.sms import (
    TwilioSmsHealthCheckOptions,
    TwilioSmsInstanceSettings,
    TwilioSmsRegistrar,
    TwilioSmsSettings,
)

EMAIL_PROVIDERS: tuple[ProviderBinding, ...] = (
    ProviderBinding(
        SendGridEmailRegistrar,
        SendGridEmailSettings,
        SendGridEmailInstanceSettings,
        SendGridEmailHealthCheckOptions,
    ),
    ProviderBinding(
        AzureEmailRegistrar,
        AzureEmailSettings,
        AzureEmailInstanceSettings,
        AzureEmailHealthCheckOptions,
    ),
)

SMS_PROVIDERS: tuple[ProviderBinding, ...] = (
    ProviderBinding(
        TwilioSmsRegistrar,
        TwilioSmsSettings,
        TwilioSmsInstanceSettings,
        TwilioSmsHealthCheckOptions,
    ),
)


def add_email_services(builder: ApplicationBuilder) -> ApplicationBuilder:
    """Add support for email by registering any configured providers and instances."""
    return enable_feature_group(builder, FeatureGroup.EMAIL, EMAIL_PROVIDERS)


def add_sms_services(builder: ApplicationBuilder) -> ApplicationBuilder:
    """Add support for SMS by registering any configured providers and instances."""
    return enable_feature_group(builder, FeatureGroup.SMS, SMS_PROVIDERS)
