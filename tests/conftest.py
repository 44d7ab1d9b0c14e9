"""
Shared fixtures for communications runtime tests.
"""

import os
import sys
from typing import Any

import pytest

os.environ.setdefault("OBSERVABILITY__LOG_FORMAT", "text")

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from comms_runtime.container import ApplicationBuilder  # noqa: E402
from comms_runtime.settings import Settings, reset_settings  # noqa: E402

SENDGRID_KEY = "SG.test-key"
AZURE_CONNECTION = "endpoint=https://acs-test.communication.azure.com/;accesskey=c2VjcmV0"


def make_settings(
    email: dict[str, Any] | None = None,
    sms: dict[str, Any] | None = None,
) -> Settings:
    """Build settings with explicit provider sections and no .env lookups."""
    return Settings(
        _env_file=None,
        communications={
            "email": {"providers": email or {}},
            "sms": {"providers": sms or {}},
        },
    )


@pytest.fixture
def settings_factory():
    return make_settings


@pytest.fixture(autouse=True)
def _reset_global_settings():
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def sendgrid_section() -> dict[str, Any]:
    return {
        "instances": {
            "default": {
                "api_key": SENDGRID_KEY,
                "from_address": "noreply@example.com",
                "from_name": "Example",
            }
        }
    }


@pytest.fixture
def azure_section() -> dict[str, Any]:
    return {
        "instances": {
            "transactional": {
                "connection_string": AZURE_CONNECTION,
                "sender_address": "donotreply@example.com",
            }
        }
    }


@pytest.fixture
def twilio_section() -> dict[str, Any]:
    return {
        "instances": {
            "alerts": {
                "account_sid": "AC1234567890",
                "auth_token": "token",
                "from_number": "+15005550006",
            }
        }
    }


@pytest.fixture
def builder() -> ApplicationBuilder:
    """Builder with no providers configured."""
    return ApplicationBuilder(make_settings())
