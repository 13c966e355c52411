"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (files -> in-memory, SQLite -> MySQL, etc.)
- Unit testing with fake implementations
- Clear separation of concerns
"""

from .response_cache import ResponseCache
from .user_store import UserStore

__all__ = [
    "ResponseCache",
    "UserStore",
]
