"""
In-process cache for sheet records and header lists.

A fresh instance is built for every request (see
`sheet_api.dependencies.get_cache`), so each request sees the sheets
as they are when it starts. Writes do not invalidate it.
"""

import logging
from typing import Any

from sheet_api.services.signing import content_signature, to_json

logger = logging.getLogger(__name__)


class Cache:
    def __init__(self) -> None:
        self._data: dict[str, Any] = {}

    def get(self, key: str, fallback: Any = None) -> Any:
        """
        Return the cached value, or store and return `fallback`.

        Falsy cached values count as misses. Returns None when there is
        neither a cached value nor a truthy fallback.
        """
        value = self._data.get(key)
        if value:
            return value
        if fallback:
            return self.set(key, fallback)
        return None

    def set(self, key: str, value: Any) -> Any:
        self._data[key] = value
        return value

    @staticmethod
    def make_key(name: str, args: Any) -> str:
        return content_signature(name + to_json(args))

    def clear(self) -> None:
        logger.info("Clearing %d cache entries", len(self._data))
        self._data = {}
