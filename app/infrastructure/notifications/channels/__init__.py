"""Notification channels."""

from infrastructure.notifications.channels.base import ChannelNotification
from infrastructure.notifications.channels.email import EmailChannel
from infrastructure.notifications.channels.sms import SmsChannel

__all__ = [
    "ChannelNotification",
    "EmailChannel",
    "SmsChannel",
]
