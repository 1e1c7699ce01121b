"""YAML locale catalogs for notification templates.

Catalog files live beside each other in a locale directory and are named
``<template_name>.<language>.yml``:

    locales/
        welcome_sms.en.yml
        welcome_sms.fr.yml
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

import structlog
import yaml

logger = structlog.get_logger()

PathLike = Union[str, Path]


class LocaleCatalogLoader:
    """Loads the string table for one template and language.

    Attributes:
        locale_dirs: Directories searched in order
        default_language: Language used when the requested one has no catalog
    """

    def __init__(self, locale_dirs: Iterable[PathLike], default_language: str = "en"):
        self.locale_dirs: List[Path] = [Path(d) for d in locale_dirs]
        self.default_language = default_language

    def find(self, template_name: str, language: str) -> Path | None:
        for locale_dir in self.locale_dirs:
            candidate = locale_dir / f"{template_name}.{language}.yml"
            if candidate.is_file():
                return candidate
        return None

    def resolve_language(self, template_name: str, language: str) -> str:
        """Language whose catalog will be loaded: the requested one if it
        exists on disk, otherwise the default."""
        if language == self.default_language or self.find(template_name, language):
            return language
        logger.info(
            "locale_catalog_fallback",
            template_name=template_name,
            language=language,
            fallback=self.default_language,
        )
        return self.default_language

    def load(self, template_name: str, language: str) -> Dict[str, Any]:
        """Load the catalog, falling back to the default language.

        Raises:
            FileNotFoundError: If neither the language nor the default exists
            ValueError: If the YAML is malformed or not a mapping
        """
        language = self.resolve_language(template_name, language)
        path = self.find(template_name, language)
        if path is None:
            raise FileNotFoundError(
                f"No locale catalog for {template_name} ({language}) in "
                f"{', '.join(str(d) for d in self.locale_dirs)}"
            )

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Locale catalog {path} must be a mapping")

        logger.debug("locale_catalog_loaded", path=str(path), keys=len(data))
        return data
