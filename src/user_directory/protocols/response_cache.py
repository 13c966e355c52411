"""Response cache protocol.

Defines the interface for any keyed, TTL-based store of computed JSON
response bodies.

Implementations can include:
- Files on local disk (default)
- An in-memory map with timestamps
- An external key-value store
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ResponseCache(Protocol):
    """Protocol for response cache backends.

    Any type that implements these methods satisfies the protocol, no
    explicit inheritance needed.

    Example:
        ```python
        from user_directory.protocols import ResponseCache

        cache: ResponseCache = FileResponseCache(cache_dir)
        key = cache.build_key("users", {"offset": 0, "limit": 10})
        if (body := cache.get(key)) is None:
            body = compute()
            cache.put(key, body)
        ```
    """

    def build_key(self, endpoint: str, params: dict[str, Any]) -> str:
        """Derive the deterministic key for an endpoint and its parameters.

        Args:
            endpoint: Endpoint name, e.g. "users" or "search"
            params: Query parameters; equivalent requests must collapse
                to the same key

        Returns:
            The cache key
        """
        ...

    def get(self, key: str) -> dict[str, Any] | None:
        """Return the cached body if present and fresh.

        Stale or unreadable entries are reported as a miss.

        Args:
            key: The cache key

        Returns:
            The cached body, or None on a miss
        """
        ...

    def put(self, key: str, body: dict[str, Any]) -> None:
        """Store a body under a key, overwriting any previous entry.

        Args:
            key: The cache key
            body: JSON-serializable response body
        """
        ...

    def invalidate_all(self) -> int:
        """Destroy every entry regardless of key or freshness.

        Returns:
            Number of entries removed
        """
        ...

    def count(self) -> int:
        """Count entries currently held, fresh or stale.

        Returns:
            Number of stored entries
        """
        ...
