"""SendGrid email integration."""

from integrations.sendgrid.client import SendGridEmailClient

__all__ = ["SendGridEmailClient"]
