"""HTTP handlers for directory operations.

Handlers convert between DTOs (API contracts) and service calls.
They own the HTTP concerns: request parsing, timing, and naming store
failures per endpoint.
"""

import time
from typing import Any

from anyio import to_thread
from fastapi import Request

from user_directory.dto import (
    DeleteResponse,
    DeleteUserRequest,
    HealthCheckResponse,
    SearchResponse,
    UsersPageResponse,
)
from user_directory.entities import PageWindow
from user_directory.errors import StoreError, ValidationError
from user_directory.protocols import ResponseCache, UserStore
from user_directory.services import MutationService, QueryService


def _elapsed_ms(start_time: float) -> float:
    return round((time.perf_counter() - start_time) * 1000, 2)


class DirectoryHandler:
    """HTTP handlers for the user directory.

    Store and cache calls block, so every service call runs in a worker
    thread and the event loop stays free for other requests.

    Example:
        ```python
        handler = DirectoryHandler(queries=queries, mutations=mutations, store=repo, cache=cache)

        @app.get("/users", response_model=UsersPageResponse)
        async def list_users(offset: str | None = None, limit: str | None = None):
            return await handler.list_users(offset, limit)
        ```
    """

    def __init__(
        self,
        queries: QueryService,
        mutations: MutationService,
        store: UserStore,
        cache: ResponseCache,
    ) -> None:
        """Initialize the directory handler.

        Args:
            queries: Read-side service (required).
            mutations: Write-side service (required).
            store: Record store, used for health checks.
            cache: Response cache, used for health checks.
        """
        self._queries = queries
        self._mutations = mutations
        self._store = store
        self._cache = cache

    async def list_users(self, offset: Any = None, limit: Any = None) -> UsersPageResponse:
        """Handle GET /users requests.

        Invalid or missing ``offset``/``limit`` fall back to defaults.

        Raises:
            StoreError: If the record store fails
        """
        start_time = time.perf_counter()
        window = PageWindow.from_raw(offset, limit)

        try:
            result = await to_thread.run_sync(self._queries.list_users, window)
        except StoreError as e:
            raise StoreError("Failed to fetch users") from e

        return UsersPageResponse(
            **result.body,
            cached=result.cached,
            load_time=_elapsed_ms(start_time),
        )

    async def search(self, q: str | None = None) -> SearchResponse:
        """Handle GET /search requests.

        Raises:
            ValidationError: If ``q`` is missing or empty
            StoreError: If the record store fails
        """
        start_time = time.perf_counter()

        try:
            result = await to_thread.run_sync(self._queries.search_users, q)
        except StoreError as e:
            raise StoreError("Search failed") from e

        return SearchResponse(
            **result.body,
            cached=result.cached,
            load_time=_elapsed_ms(start_time),
        )

    async def delete_user(self, request: Request) -> DeleteResponse:
        """Handle POST /delete requests.

        Raises:
            ValidationError: If the body is not JSON or lacks a valid id
            NotFoundError: If the user does not exist
            ConflictError: If the user is already deleted
            StoreError: If the record store fails
        """
        try:
            data = await request.json()
        except ValueError:
            data = None

        if not isinstance(data, dict) or data.get("id") is None:
            raise ValidationError('Invalid request. JSON body with "id" required.')

        payload = DeleteUserRequest.model_validate(data)

        try:
            result = await to_thread.run_sync(self._mutations.delete_user, payload.id)
        except StoreError as e:
            raise StoreError("Failed to delete user") from e

        return DeleteResponse(success=True, total=result.total, message=result.message)

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        database_ok = await to_thread.run_sync(self._store.health_check)
        cache_entries = await to_thread.run_sync(self._cache.count)

        return HealthCheckResponse(
            status="healthy" if database_ok else "unhealthy",
            database=database_ok,
            cache_entries=cache_entries,
        )
