"""Query service for the paginated listing and search.

Both reads go through the response cache first. On a miss the service
queries the record store, shapes the body and writes it back to the
cache; the body is identical whichever path produced it.
"""

import logging
import re
from collections.abc import Callable
from typing import Any

from user_directory.config import settings
from user_directory.entities import PageWindow, QueryResult, UserRecord
from user_directory.errors import ValidationError
from user_directory.protocols import ResponseCache, UserStore

logger = logging.getLogger(__name__)

USERS_ENDPOINT = "users"
SEARCH_ENDPOINT = "search"

# Markup-significant characters and ASCII control characters
_UNSAFE_CHARS = re.compile(r"[<>\"'&\x00-\x1f\x7f]")


def normalize_search_term(raw: str | None, max_length: int | None = None) -> str:
    """Validate and clean a free-text search term.

    The term is trimmed, stripped of characters that could be read as
    markup, trimmed again and truncated. This is hygiene for echoed
    values; the store query always binds the term as a parameter.

    Args:
        raw: The raw ``q`` value, possibly missing
        max_length: Maximum kept length. Defaults to settings.

    Returns:
        The cleaned term

    Raises:
        ValidationError: If the term is missing or empty
    """
    max_length = max_length or settings.search_max_length

    term = (raw or "").strip()
    if not term:
        raise ValidationError('Search query parameter "q" is required.')

    term = _UNSAFE_CHARS.sub("", term).strip()
    if not term:
        raise ValidationError('Search query parameter "q" must contain searchable text.')

    return term[:max_length].strip()


def user_to_dict(user: UserRecord) -> dict[str, Any]:
    """Render a record as the public JSON shape (status is never exposed)."""
    return {
        "id": user.id,
        "fname": user.fname,
        "lname": user.lname,
        "email": user.email,
        "review": user.review,
        "created_at": user.created_at.isoformat(sep=" ", timespec="seconds") if user.created_at else None,
    }


class QueryService:
    """Read side of the directory.

    Depends on PROTOCOLS, not concrete implementations:
    - UserStore: any relational store of user records
    - ResponseCache: files on disk, an in-memory map, etc.

    Example:
        ```python
        from user_directory.services import QueryService

        queries = QueryService.create(store=repository, cache=response_cache)
        result = queries.list_users(PageWindow(offset=0, limit=10))
        result.body["hasMore"], result.cached
        ```
    """

    def __init__(
        self,
        store: UserStore,
        cache: ResponseCache,
        search_limit: int | None = None,
        max_term_length: int | None = None,
    ) -> None:
        """Initialize the query service.

        Args:
            store: Record store (required).
            cache: Response cache (required).
            search_limit: Maximum rows returned by a search. Defaults to settings.
            max_term_length: Maximum search term length. Defaults to settings.
        """
        self._store = store
        self._cache = cache
        self._search_limit = search_limit or settings.search_result_limit
        self._max_term_length = max_term_length or settings.search_max_length

    @classmethod
    def create(
        cls,
        store: UserStore,
        cache: ResponseCache,
        search_limit: int | None = None,
        max_term_length: int | None = None,
    ) -> "QueryService":
        """Factory method to create QueryService with settings defaults."""
        return cls(
            store=store,
            cache=cache,
            search_limit=search_limit,
            max_term_length=max_term_length,
        )

    def _read_through(
        self,
        endpoint: str,
        params: dict[str, Any],
        compute: Callable[[], dict[str, Any]],
    ) -> QueryResult:
        key = self._cache.build_key(endpoint, params)

        cached_body = self._cache.get(key)
        if cached_body is not None:
            logger.debug("Served %s from the response cache", endpoint)
            return QueryResult(body=cached_body, cached=True)

        body = compute()
        self._cache.put(key, body)
        return QueryResult(body=body, cached=False)

    def list_users(self, window: PageWindow) -> QueryResult:
        """Return one page of active users.

        Business logic:
        1. Count active records
        2. Fetch the window ordered by (fname DESC, id DESC)
        3. Derive hasMore from the window and the count

        The count and the fetch are separate statements; a concurrent
        delete between them can make ``total`` disagree by one.

        Args:
            window: Offset/limit window, already clamped

        Returns:
            QueryResult whose body has users, total and hasMore
        """

        def compute() -> dict[str, Any]:
            total = self._store.count_active()
            users = self._store.fetch_page(window.offset, window.limit)
            return {
                "users": [user_to_dict(user) for user in users],
                "total": total,
                "hasMore": window.has_more(total),
            }

        return self._read_through(
            USERS_ENDPOINT,
            {"offset": window.offset, "limit": window.limit},
            compute,
        )

    def search_users(self, raw_query: str | None) -> QueryResult:
        """Search active users by first, last or full name.

        Business logic:
        1. Validate and clean the term (before any store access)
        2. Fetch the first matches ordered by (fname, lname, id) ascending
        3. Count all matches and all active users

        Args:
            raw_query: The raw ``q`` value

        Returns:
            QueryResult whose body has users, matchTotal and total

        Raises:
            ValidationError: If the term is missing or empty
        """
        term = normalize_search_term(raw_query, self._max_term_length)

        def compute() -> dict[str, Any]:
            users = self._store.search(term, self._search_limit)
            match_total = self._store.count_matches(term)
            total = self._store.count_active()
            return {
                "users": [user_to_dict(user) for user in users],
                "matchTotal": match_total,
                "total": total,
            }

        return self._read_through(SEARCH_ENDPOINT, {"q": term}, compute)
