"""In-memory TTL cache for search results."""

import hashlib
import json
import logging
import time
from typing import Any, Awaitable, Callable, Optional

__all__ = ["SearchCache", "get_cache_key", "CACHE_TTL_SECONDS"]

logger = logging.getLogger(__name__)

# Cache configuration
CACHE_TTL_SECONDS = 1800  # 30 minutes
CACHE_MAX_ENTRIES = 10000


def get_cache_key(tool_name: str, **params) -> str:
    """Generate cache key from tool name and parameters."""
    param_str = json.dumps(params, sort_keys=True, ensure_ascii=False)
    return hashlib.md5(f"{tool_name}:{param_str}".encode()).hexdigest()


class SearchCache:
    """
    Keyed fetch-or-compute cache with per-entry TTL.

    Constructed explicitly and handed to the search orchestrator. There is
    no single-flight: two concurrent misses on one key both compute and the
    last write wins.

    Example:
        >>> cache = SearchCache(ttl_seconds=60)
        >>> results = await cache.get_or_set(key, compute)
    """

    def __init__(
        self,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        max_entries: int = CACHE_MAX_ENTRIES,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._entries: dict[str, dict[str, Any]] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self._lookup(key) is not None

    def get(self, key: str) -> Optional[Any]:
        """Retrieve cached value if not expired."""
        entry = self._lookup(key)
        if entry is None:
            self.misses += 1
            return None
        self.hits += 1
        return entry["data"]

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """Store value with an expiry of ``ttl`` (or the default TTL) seconds."""
        if key not in self._entries and len(self._entries) >= self.max_entries:
            self._evict_oldest()
        expires = time.monotonic() + (ttl if ttl is not None else self.ttl_seconds)
        self._entries[key] = {"data": value, "expires": expires}

    async def get_or_set(
        self,
        key: str,
        compute: Callable[[], Awaitable[Any]],
        ttl: Optional[float] = None,
    ) -> Any:
        """Return the cached value, or await ``compute()`` and cache its result."""
        entry = self._lookup(key)
        if entry is not None:
            self.hits += 1
            return entry["data"]

        self.misses += 1
        value = await compute()
        self.set(key, value, ttl)
        return value

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> int:
        """Drop every entry. Returns the number of entries removed."""
        count = len(self._entries)
        self._entries.clear()
        logger.info(f"Cache cleared ({count} entries)")
        return count

    def stats(self) -> dict[str, Any]:
        return {
            "keys": len(self._entries),
            "hits": self.hits,
            "misses": self.misses,
            "ttl_seconds": self.ttl_seconds,
        }

    def _lookup(self, key: str) -> Optional[dict[str, Any]]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if time.monotonic() >= entry["expires"]:
            del self._entries[key]  # Clean up expired
            return None
        return entry

    def _evict_oldest(self) -> None:
        # dicts keep insertion order; the first key is the oldest entry
        oldest = next(iter(self._entries), None)
        if oldest is not None:
            del self._entries[oldest]
