"""
infrastructure/cache_manager.py

Named memo caches shared across planning runs.

Each cache is a cachetools.TTLCache with its own hit/miss counters. The
planner heuristic keeps one cache per clearance cost, keyed by
(literal, state, argument forms).

Usage:
    from infrastructure.cache_manager import get_cache_manager

    cache_mgr = get_cache_manager()
    cache_mgr.ensure_cache("planner_heuristics_c3", maxsize=20000, ttl=600)

    value = cache_mgr.get("planner_heuristics_c3", key)
    if value is None:
        cache_mgr.set("planner_heuristics_c3", key, compute())

Note:
    Individual lookups are not logged; the heuristic is queried once per
    generated search node.
"""

import threading
from dataclasses import dataclass
from typing import Any, Dict, Hashable, Optional

from cachetools import TTLCache

from component_15_logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class MemoCache:
    """One named TTL cache together with its counters."""

    entries: TTLCache
    maxsize: int
    ttl: int
    hits: int = 0
    misses: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0


class CacheManager:
    """Registry of named memo caches; all operations are lock-protected."""

    def __init__(self):
        self._caches: Dict[str, MemoCache] = {}
        self._lock = threading.RLock()

    def ensure_cache(self, name: str, maxsize: int, ttl: int) -> None:
        """
        Create cache ``name`` unless it already exists.

        Raises:
            ValueError: If maxsize or ttl is not positive
        """
        if maxsize <= 0 or ttl <= 0:
            raise ValueError(f"maxsize and ttl must be positive, got {maxsize}/{ttl}")

        with self._lock:
            if name in self._caches:
                return
            self._caches[name] = MemoCache(TTLCache(maxsize=maxsize, ttl=ttl), maxsize, ttl)

        logger.info("Cache registered", extra={"cache": name, "maxsize": maxsize, "ttl": ttl})

    def has_cache(self, name: str) -> bool:
        with self._lock:
            return name in self._caches

    def _cache(self, name: str) -> MemoCache:
        try:
            return self._caches[name]
        except KeyError:
            raise ValueError(f"Cache '{name}' not registered") from None

    def get(self, name: str, key: Hashable) -> Optional[Any]:
        """Cached value, or None on a miss (expired entries are misses)."""
        with self._lock:
            cache = self._cache(name)
            if key in cache.entries:
                cache.hits += 1
                return cache.entries[key]
            cache.misses += 1
            return None

    def set(self, name: str, key: Hashable, value: Any) -> None:
        with self._lock:
            self._cache(name).entries[key] = value

    def invalidate(self, name: str, key: Optional[Hashable] = None) -> int:
        """Drop one key, or the whole cache when ``key`` is None. Returns the count."""
        with self._lock:
            entries = self._cache(name).entries
            if key is not None:
                return 1 if entries.pop(key, None) is not None else 0
            count = len(entries)
            entries.clear()

        logger.info("Cache cleared", extra={"cache": name, "entries": count})
        return count

    def get_stats(self, name: str) -> Dict[str, Any]:
        with self._lock:
            cache = self._cache(name)
            return {
                "cache_name": name,
                "hits": cache.hits,
                "misses": cache.misses,
                "hit_rate": cache.hit_rate,
                "size": len(cache.entries),
                "maxsize": cache.maxsize,
                "ttl": cache.ttl,
            }


_cache_manager_instance: Optional[CacheManager] = None
_instance_lock = threading.Lock()


def get_cache_manager() -> CacheManager:
    """Process-wide CacheManager, created lazily."""
    global _cache_manager_instance

    if _cache_manager_instance is None:
        with _instance_lock:
            if _cache_manager_instance is None:
                _cache_manager_instance = CacheManager()

    return _cache_manager_instance


def reset_cache_manager() -> None:
    """Drop every cache (tests only)."""
    global _cache_manager_instance

    with _instance_lock:
        _cache_manager_instance = None
