"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Settings stored in app.state by create_app
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from user_directory.config import Settings, get_settings
from user_directory.database import create_database_engine
from user_directory.handlers import DirectoryHandler
from user_directory.logging_config import setup_logging
from user_directory.repositories import FileResponseCache, SqlUserRepository
from user_directory.services import MutationService, QueryService

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> DirectoryHandler:
    """Dependency injection for DirectoryHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The DirectoryHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "directory_handler", None)
    if handler is None:
        raise RuntimeError("DirectoryHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores them in app.state:
    1. Engine (process-wide connection pool) - opened here, disposed on shutdown
    2. Repositories (record store, response cache)
    3. Services (queries, mutations)
    4. Handler (HTTP endpoints) - stored in app.state.directory_handler

    Args:
        app: The FastAPI application instance

    Yields:
        None
    """
    app_settings: Settings = getattr(app.state, "settings", None) or get_settings()
    setup_logging(app_settings.log_level, app_settings.log_file)

    engine = create_database_engine(app_settings.database_url, app_settings.database_pool_size)
    repository = SqlUserRepository.create(engine=engine)
    repository.initialize()

    response_cache = FileResponseCache.create(
        cache_dir=app_settings.cache_dir,
        ttl=app_settings.cache_ttl,
    )

    queries = QueryService.create(
        store=repository,
        cache=response_cache,
        search_limit=app_settings.search_result_limit,
        max_term_length=app_settings.search_max_length,
    )
    mutations = MutationService.create(store=repository, cache=response_cache)
    handler = DirectoryHandler(
        queries=queries,
        mutations=mutations,
        store=repository,
        cache=response_cache,
    )

    app.state.repository = repository
    app.state.response_cache = response_cache
    app.state.directory_handler = handler

    logger.info("User directory started")
    logger.info("Cache directory: %s (ttl %ss)", app_settings.cache_dir, response_cache.ttl)

    yield

    del app.state.directory_handler
    del app.state.response_cache
    del app.state.repository
    response_cache.close()
    engine.dispose()
    logger.info("User directory shut down")


# Type alias for cleaner dependency injection
HandlerDep = Annotated[DirectoryHandler, Depends(get_handler)]
