"""Disk-backed implementation of ResponseCache.

Entries live in a :mod:`diskcache` directory, stored as JSON through
``JSONDisk``. The whole directory is the unit wiped by ``invalidate_all``.
"""

import hashlib
import logging
import sqlite3
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

from diskcache import Cache, JSONDisk, Timeout

from user_directory.config import settings
from user_directory.entities import CacheEntry

logger = logging.getLogger(__name__)

# Failures raised by diskcache when the directory or its index is unusable
CACHE_ERRORS = (OSError, ValueError, sqlite3.Error, Timeout)


def _canonical_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value.strip().lower()
    return str(value)


class FileResponseCache:
    """Response cache persisted on local disk.

    This class satisfies the ResponseCache protocol through structural
    typing - no explicit inheritance needed.

    Values are stored as ``{"cached_at": <unix time>, "body": {...}}``.
    Freshness is judged against the injected clock. Each entry is also
    written with ``expire=ttl`` so diskcache culls old entries on its own.
    diskcache writes each entry in a SQLite transaction, so concurrent
    writers of one key end with the last write and readers never see a
    partial value.
    """

    def __init__(
        self,
        cache_dir: str | Path | None = None,
        ttl: int | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the disk cache.

        Args:
            cache_dir: Directory holding the cache. Created on demand.
            ttl: Time-to-live for entries in seconds.
            clock: Source of the current Unix time.
        """
        self._dir = Path(cache_dir or settings.cache_dir)
        self._ttl = ttl or settings.cache_ttl
        self._clock = clock
        self._cache = Cache(str(self._dir), disk=JSONDisk)

    @classmethod
    def create(
        cls,
        cache_dir: str | Path | None = None,
        ttl: int | None = None,
    ) -> "FileResponseCache":
        """Factory method to create FileResponseCache with defaults.

        Args:
            cache_dir: Cache directory. If None, uses settings.
            ttl: Entry TTL in seconds. If None, uses settings.

        Returns:
            Configured FileResponseCache
        """
        return cls(cache_dir=cache_dir, ttl=ttl)

    def build_key(self, endpoint: str, params: dict[str, Any]) -> str:
        canonical = "&".join(f"{name}={_canonical_value(params[name])}" for name in sorted(params))
        return hashlib.md5(f"{endpoint}:{canonical}".encode("utf-8")).hexdigest()

    def _read_entry(self, key: str) -> CacheEntry | None:
        try:
            data = self._cache.get(key)
        except CACHE_ERRORS as exc:
            logger.warning("Unreadable cache entry %s: %s", key, exc)
            return None

        if data is None:
            return None

        try:
            body = data["body"]
            cached_at = float(data["cached_at"])
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning("Corrupt cache entry %s: %s", key, exc)
            return None

        if not isinstance(body, dict):
            logger.warning("Corrupt cache entry %s: body is not an object", key)
            return None

        return CacheEntry(key=key, body=body, cached_at=cached_at)

    def get(self, key: str) -> dict[str, Any] | None:
        entry = self._read_entry(key)
        if entry is None:
            logger.debug("Cache miss: %s", key)
            return None

        if not entry.is_fresh(self._clock(), self._ttl):
            logger.debug("Cache entry expired: %s", key)
            return None

        logger.debug("Cache hit: %s", key)
        return entry.body

    def put(self, key: str, body: dict[str, Any]) -> None:
        try:
            self._cache.set(key, {"cached_at": self._clock(), "body": body}, expire=self._ttl, retry=True)
        except CACHE_ERRORS as exc:
            logger.warning("Failed to write cache entry %s: %s", key, exc)

    def invalidate_all(self) -> int:
        try:
            removed = self._cache.clear(retry=True)
        except CACHE_ERRORS as exc:
            logger.warning("Failed to clear response cache: %s", exc)
            return 0

        logger.info("Invalidated %d cache entries", removed)
        return removed

    def count(self) -> int:
        return len(self._cache)

    def close(self) -> None:
        """Close the underlying cache connections."""
        self._cache.close()

    @property
    def ttl(self) -> int:
        """Get the entry time-to-live in seconds."""
        return self._ttl
