"""Jinja2 renderer for localized notification templates."""

from pathlib import Path
from typing import Iterable, List, Optional, Union

import structlog
from jinja2 import Environment, FileSystemLoader, StrictUndefined

from infrastructure.notifications.models import Notification
from infrastructure.notifications.rendering.base import TemplateRenderer
from infrastructure.notifications.rendering.cache import LocalizerCache
from infrastructure.notifications.rendering.catalog import LocaleCatalogLoader

logger = structlog.get_logger()

TEMPLATE_SUFFIX = ".j2"


class JinjaTemplateRenderer(TemplateRenderer):
    """Renders ``<template_name>.j2`` with the notification's locale catalog.

    Templates see two names: ``notification`` (the notification instance)
    and ``t`` (its localized string table). Email templates opt into HTML
    escaping with ``{% autoescape true %}``.

    Args:
        template_dirs: Directories holding ``*.j2`` templates
        locale_dirs: Directories holding ``<template_name>.<language>.yml``
        localizer_cache: Cache shared across renderers; a private one is
            created when omitted
        default_language: Fallback when the notification's language has no
            catalog or its locale is blank

    Example:
        renderer = JinjaTemplateRenderer(
            template_dirs=[WELCOME_DIR / "templates"],
            locale_dirs=[WELCOME_DIR / "locales"],
        )
        content = await renderer.render(notification)
    """

    def __init__(
        self,
        template_dirs: Iterable[Union[str, Path]],
        locale_dirs: Iterable[Union[str, Path]],
        localizer_cache: Optional[LocalizerCache] = None,
        default_language: str = "en",
    ):
        self.template_dirs: List[Path] = [Path(d) for d in template_dirs]
        self.default_language = default_language
        self.localizer_cache = (
            localizer_cache if localizer_cache is not None else LocalizerCache()
        )
        self.catalogs = LocaleCatalogLoader(locale_dirs, default_language)
        self._environment = Environment(
            loader=FileSystemLoader([str(d) for d in self.template_dirs]),
            enable_async=True,
            undefined=StrictUndefined,
            autoescape=False,
        )

    def _template_file(self, notification: Notification) -> str:
        return f"{notification.template_name}{TEMPLATE_SUFFIX}"

    def can_render(self, notification: Notification) -> bool:
        if not getattr(notification, "template_name", ""):
            return False
        filename = self._template_file(notification)
        return any((d / filename).is_file() for d in self.template_dirs)

    async def render(self, notification: Notification) -> str:
        # Keyed by the language actually loaded
        language = self.catalogs.resolve_language(
            notification.template_name, notification.language or self.default_language
        )
        catalog = self.localizer_cache.get_or_load(
            notification.template_name, language, self.catalogs.load
        )
        template = self._environment.get_template(self._template_file(notification))
        content = await template.render_async(notification=notification, t=catalog)

        logger.debug(
            "notification_rendered",
            template_name=notification.template_name,
            language=language,
            length=len(content),
        )
        return content.strip()
