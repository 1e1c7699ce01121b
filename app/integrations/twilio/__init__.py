"""Twilio SMS integration."""

from integrations.twilio.client import TwilioSmsClient

__all__ = ["TwilioSmsClient"]
