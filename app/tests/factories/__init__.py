"""Test data factories for deterministic test data generation."""

from tests.factories.notifications import (
    make_phone_number,
    make_welcome_email,
    make_welcome_sms,
)
from tests.factories.resilience import (
    make_connect_error,
    make_provider_error,
)

__all__ = [
    "make_phone_number",
    "make_welcome_email",
    "make_welcome_sms",
    "make_connect_error",
    "make_provider_error",
]
