"""Repository layer for data access.

This layer abstracts external dependencies (the relational record store,
the on-disk response cache) behind protocol-based interfaces. This enables:
- Easy swapping of implementations
- Unit testing with fake implementations
- Clear separation of concerns
"""

from user_directory.protocols import ResponseCache, UserStore

from .file_cache_repository import FileResponseCache
from .user_repository import SqlUserRepository

__all__ = [
    "ResponseCache",
    "UserStore",
    "FileResponseCache",
    "SqlUserRepository",
]
