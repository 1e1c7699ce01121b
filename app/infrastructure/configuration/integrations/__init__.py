"""Integration settings __init__ - exports all provider settings."""

from infrastructure.configuration.integrations.folio import FolioSettings
from infrastructure.configuration.integrations.sendgrid import SendGridSettings
from infrastructure.configuration.integrations.twilio import TwilioSettings

__all__ = [
    "FolioSettings",
    "SendGridSettings",
    "TwilioSettings",
]
