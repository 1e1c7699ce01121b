"""Notification dispatch: validate, render and send through provider channels.

Provides:
- First-match channel and renderer selection
- Validation before any rendering or network I/O
- Localized Jinja2 rendering
- A fire-and-forget queue drained by one background consumer

Usage:
    from infrastructure.notifications import NotificationService

    service = NotificationService.from_settings(settings, renderers=[renderer])
    service.start()

    # Wait for delivery
    await service.send(notification)

    # Or return immediately
    service.send_nowait(notification)
"""

# Models
from infrastructure.notifications.models import (
    EmailMessage,
    EmailNotification,
    Notification,
    NotificationKind,
    SmsMessage,
    SmsNotification,
)
from infrastructure.notifications.value_objects import EmailAddress, PhoneNumber

# Errors
from infrastructure.notifications.exceptions import (
    ChannelMismatchError,
    NoChannelRegisteredError,
    NoRendererRegisteredError,
    NotificationError,
    NotificationQueueClosedError,
    NotificationValidationError,
    ValidationFailure,
)

# Pipeline
from infrastructure.notifications.channels import (
    ChannelNotification,
    EmailChannel,
    SmsChannel,
)
from infrastructure.notifications.rendering import (
    JinjaTemplateRenderer,
    LocaleCatalogLoader,
    LocalizerCache,
    TemplateRenderer,
)
from infrastructure.notifications.validation import (
    LOCALE_PATTERN,
    NotificationValidator,
    SchemaNotificationValidator,
)
from infrastructure.notifications.dispatcher import NotificationSender

# Fire-and-forget
from infrastructure.notifications.queue import NotificationQueue
from infrastructure.notifications.background import NotificationBackgroundService
from infrastructure.notifications.service import NotificationService

__all__ = [
    # Models
    "EmailMessage",
    "EmailNotification",
    "Notification",
    "NotificationKind",
    "SmsMessage",
    "SmsNotification",
    "EmailAddress",
    "PhoneNumber",
    # Errors
    "ChannelMismatchError",
    "NoChannelRegisteredError",
    "NoRendererRegisteredError",
    "NotificationError",
    "NotificationQueueClosedError",
    "NotificationValidationError",
    "ValidationFailure",
    # Pipeline
    "ChannelNotification",
    "EmailChannel",
    "SmsChannel",
    "JinjaTemplateRenderer",
    "LocaleCatalogLoader",
    "LocalizerCache",
    "TemplateRenderer",
    "LOCALE_PATTERN",
    "NotificationValidator",
    "SchemaNotificationValidator",
    "NotificationSender",
    # Fire-and-forget
    "NotificationQueue",
    "NotificationBackgroundService",
    "NotificationService",
]
