"""Welcome notifications sent to new users by SMS or email.

Templates live in ``templates/`` and their string tables in
``locales/<template_name>.<language>.yml`` (English and French).
"""

from pathlib import Path
from typing import Optional

from infrastructure.notifications.rendering import JinjaTemplateRenderer, LocalizerCache
from modules.welcome.notifications import (
    WelcomeEmailNotification,
    WelcomeSmsNotification,
)
from modules.welcome.validators import WELCOME_SCHEMAS, WelcomeSmsSchema

WELCOME_DIR = Path(__file__).parent
TEMPLATES_DIR = WELCOME_DIR / "templates"
LOCALES_DIR = WELCOME_DIR / "locales"


def build_renderer(
    localizer_cache: Optional[LocalizerCache] = None, default_language: str = "en"
) -> JinjaTemplateRenderer:
    """Renderer for the welcome templates."""
    return JinjaTemplateRenderer(
        template_dirs=[TEMPLATES_DIR],
        locale_dirs=[LOCALES_DIR],
        localizer_cache=localizer_cache,
        default_language=default_language,
    )


__all__ = [
    "WelcomeEmailNotification",
    "WelcomeSmsNotification",
    "WelcomeSmsSchema",
    "WELCOME_SCHEMAS",
    "TEMPLATES_DIR",
    "LOCALES_DIR",
    "build_renderer",
]
