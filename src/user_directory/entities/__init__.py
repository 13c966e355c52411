"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .cache_entry import CacheEntry
from .page_window import DEFAULT_LIMIT, DEFAULT_OFFSET, MAX_LIMIT, PageWindow
from .query_result import DeleteResult, QueryResult
from .user_record import MAX_USER_ID, STATUS_ACTIVE, STATUS_DELETED, UserRecord

__all__ = [
    "CacheEntry",
    "DeleteResult",
    "PageWindow",
    "QueryResult",
    "UserRecord",
    "DEFAULT_LIMIT",
    "DEFAULT_OFFSET",
    "MAX_LIMIT",
    "MAX_USER_ID",
    "STATUS_ACTIVE",
    "STATUS_DELETED",
]
