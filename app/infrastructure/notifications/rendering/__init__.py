"""Notification rendering: renderer contract, Jinja2 renderer and locale catalogs."""

from infrastructure.notifications.rendering.base import TemplateRenderer
from infrastructure.notifications.rendering.cache import LocalizerCache
from infrastructure.notifications.rendering.catalog import LocaleCatalogLoader
from infrastructure.notifications.rendering.jinja import JinjaTemplateRenderer

__all__ = [
    "TemplateRenderer",
    "LocalizerCache",
    "LocaleCatalogLoader",
    "JinjaTemplateRenderer",
]
