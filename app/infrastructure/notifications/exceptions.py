"""Errors raised by the notification pipeline.

Routing errors (no channel, no renderer) and validation errors are fatal
for the call and never retried. Provider failures are not defined here:
they surface as ``integrations.errors.ProviderError``, ``httpx`` transport
errors or ``CircuitBreakerOpenError`` from the provider clients.
"""

from dataclasses import dataclass
from typing import Iterable, List


class NotificationError(Exception):
    """Base class for notification pipeline errors."""


class NoChannelRegisteredError(NotificationError):
    """No registered channel can handle the notification."""

    def __init__(self, notification_type: str):
        super().__init__(f"No channel registered for {notification_type}")
        self.notification_type = notification_type


class NoRendererRegisteredError(NotificationError):
    """No registered renderer can render the notification."""

    def __init__(self, notification_type: str):
        super().__init__(f"No renderer registered for {notification_type}")
        self.notification_type = notification_type


@dataclass(frozen=True)
class ValidationFailure:
    """One violated validation rule."""

    field: str
    message: str


class NotificationValidationError(NotificationError):
    """Aggregate of every validation rule a notification violates.

    Attributes:
        errors: One ValidationFailure per violated rule
    """

    def __init__(self, errors: Iterable[ValidationFailure]):
        self.errors: List[ValidationFailure] = list(errors)
        details = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(f"Notification validation failed: {details}")

    def to_dict(self) -> list[dict]:
        return [{"field": e.field, "message": e.message} for e in self.errors]


class ChannelMismatchError(NotificationError):
    """A channel was asked to send a notification it cannot handle."""

    def __init__(self, channel_name: str, notification_type: str):
        super().__init__(
            f"Channel '{channel_name}' cannot handle {notification_type}"
        )
        self.channel_name = channel_name
        self.notification_type = notification_type


class NotificationQueueClosedError(NotificationError):
    """The fire-and-forget queue no longer accepts notifications."""
