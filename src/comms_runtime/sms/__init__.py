"""SMS providers."""

from .base import SmsClient, SmsHealthCheck
from .twilio import (
    TwilioSmsClient,
    TwilioSmsHealthCheckOptions,
    TwilioSmsInstanceSettings,
    TwilioSmsRegistrar,
    TwilioSmsSettings,
)

__all__ = [
    "SmsClient",
    "SmsHealthCheck",
    "TwilioSmsClient",
    "TwilioSmsHealthCheckOptions",
    "TwilioSmsInstanceSettings",
    "TwilioSmsRegistrar",
    "TwilioSmsSettings",
]
