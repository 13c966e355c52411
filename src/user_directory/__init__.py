"""User Directory - paginated, searchable user listing with a response cache.

This package provides a layered architecture:

Layers:
    - protocols: Interface contracts (UserStore, ResponseCache)
    - repositories: Data access implementations (SQL store, file cache)
    - services: Business logic (queries, soft delete)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from user_directory.database import create_database_engine
    from user_directory.repositories import FileResponseCache, SqlUserRepository
    from user_directory.services import QueryService

    repository = SqlUserRepository.create(engine=create_database_engine())
    queries = QueryService.create(store=repository, cache=FileResponseCache.create())
    ```

For HTTP API:
    ```python
    from user_directory.api.app import app, create_app
    ```
"""

from user_directory.config import Settings, get_settings, settings
from user_directory.dto import DeleteResponse, SearchResponse, UsersPageResponse
from user_directory.entities import CacheEntry, PageWindow, UserRecord
from user_directory.errors import (
    ConflictError,
    DirectoryError,
    MethodNotAllowedError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from user_directory.handlers import DirectoryHandler
from user_directory.protocols import ResponseCache, UserStore
from user_directory.repositories import FileResponseCache, SqlUserRepository
from user_directory.services import MutationService, QueryService

__all__ = [
    # Configuration
    "Settings",
    "settings",
    "get_settings",
    # Protocols (interfaces)
    "ResponseCache",
    "UserStore",
    # Services (business logic)
    "QueryService",
    "MutationService",
    # Handlers (HTTP)
    "DirectoryHandler",
    # Repositories (data access)
    "FileResponseCache",
    "SqlUserRepository",
    # Entities (domain models)
    "CacheEntry",
    "PageWindow",
    "UserRecord",
    # DTOs (API contracts)
    "UsersPageResponse",
    "SearchResponse",
    "DeleteResponse",
    # Errors
    "DirectoryError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "MethodNotAllowedError",
    "StoreError",
]
