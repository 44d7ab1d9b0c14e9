"""
Communications runtime - provider wiring for email and SMS.

Registers configured email (SendGrid, Azure Communication Services) and SMS
(Twilio) provider instances into an application's service container, at most
once per feature group.
"""

from comms_runtime.container import ApplicationBuilder, ServiceCollection
from comms_runtime.exceptions import (
    CommunicationsError,
    DuplicateHealthCheckError,
    DuplicateServiceError,
    ProviderConfigurationError,
    ServiceNotFoundError,
)
from comms_runtime.hosting import (
    EMAIL_PROVIDERS,
    SMS_PROVIDERS,
    add_email_services,
    add_sms_services,
)
from comms_runtime.ledger import FeatureGroup, RegistrationLedger
from comms_runtime.registration import (
    ProviderBinding,
    ServiceProviderRegistrar,
    enable_feature_group,
    register_service_provider,
)

__version__ = "1.0.0"

__all__ = [
    "ApplicationBuilder",
    "ServiceCollection",
    "CommunicationsError",
    "DuplicateHealthCheckError",
    "DuplicateServiceError",
    "ProviderConfigurationError",
    "ServiceNotFoundError",
    "EMAIL_PROVIDERS",
    "SMS_PROVIDERS",
    "add_email_services",
    "add_sms_services",
    "FeatureGroup",
    "RegistrationLedger",
    "ProviderBinding",
    "ServiceProviderRegistrar",
    "enable_feature_group",
    "register_service_provider",
    "__version__",
]
