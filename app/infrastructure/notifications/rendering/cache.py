"""Owned cache of loaded locale catalogs."""

import threading
from typing import Any, Callable, Dict, Tuple

import structlog

logger = structlog.get_logger()

CacheKey = Tuple[str, str]


class LocalizerCache:
    """Locale catalogs keyed by ``(template_name, language)``.

    One instance is passed to each renderer that should share it. Call
    ``clear()`` after templates or catalogs change on disk.
    """

    def __init__(self):
        self._entries: Dict[CacheKey, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def get_or_load(
        self,
        template_name: str,
        language: str,
        loader: Callable[[str, str], Dict[str, Any]],
    ) -> Dict[str, Any]:
        key = (template_name, language)
        with self._lock:
            cached = self._entries.get(key)
        if cached is not None:
            return cached

        catalog = loader(template_name, language)
        with self._lock:
            # Another caller may have loaded it meanwhile; keep the first
            return self._entries.setdefault(key, catalog)

    def clear(self) -> None:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info("localizer_cache_cleared", entries=count)

    def __contains__(self, key: CacheKey) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
