"""Renderer contract."""

from abc import ABC, abstractmethod

from infrastructure.notifications.models import Notification


class TemplateRenderer(ABC):
    """Turns a notification into deliverable content.

    The dispatcher uses the first registered renderer whose ``can_render``
    returns True.
    """

    @abstractmethod
    def can_render(self, notification: Notification) -> bool:
        """Check whether this renderer has a template for the notification."""

    @abstractmethod
    async def render(self, notification: Notification) -> str:
        """Render the notification content."""
