"""Cache entry domain entity."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    """Domain entity for a cached response body.

    This is an internal representation used by the response cache.
    Callers of the cache only ever see ``body``.

    Attributes:
        key: Hash of the endpoint name and canonical query parameters
        body: The JSON response body (without per-request fields)
        cached_at: Unix timestamp of the write
    """

    key: str
    body: dict[str, Any]
    cached_at: float

    def is_fresh(self, now: float, ttl: float) -> bool:
        """Check whether the entry is still inside its TTL window."""
        return now - self.cached_at < ttl
