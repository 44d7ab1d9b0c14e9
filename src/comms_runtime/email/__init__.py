"""Email providers."""

from .azure import (
    AzureEmailClient,
    AzureEmailHealthCheckOptions,
    AzureEmailInstanceSettings,
    AzureEmailRegistrar,
    AzureEmailSettings,
)
from .base import EmailClient, EmailHealthCheck
from .sendgrid import (
    SendGridEmailClient,
    SendGridEmailHealthCheckOptions,
    SendGridEmailInstanceSettings,
    SendGridEmailRegistrar,
    SendGridEmailSettings,
)

__all__ = [
    "EmailClient",
    "EmailHealthCheck",
    "SendGridEmailClient",
    "SendGridEmailHealthCheckOptions",
    "SendGridEmailInstanceSettings",
    "SendGridEmailRegistrar",
    "SendGridEmailSettings",
    "AzureEmailClient",
    "AzureEmailHealthCheckOptions",
    "AzureEmailInstanceSettings",
    "AzureEmailRegistrar",
    "AzureEmailSettings",
]
