import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from user_directory.api.dependencies import HandlerDep, lifespan
from user_directory.config import Settings, get_settings
from user_directory.dto import (
    DeleteResponse,
    ErrorResponse,
    HealthCheckResponse,
    SearchResponse,
    UsersPageResponse,
)
from user_directory.errors import (
    GENERIC_STORE_MESSAGE,
    DirectoryError,
    MethodNotAllowedError,
    StoreError,
)

logger = logging.getLogger(__name__)

API_TITLE = "User Directory API"
API_VERSION = "0.1.0"

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {500: {"model": ErrorResponse}}


async def directory_error_handler(request: Request, exc: DirectoryError) -> JSONResponse:
    if isinstance(exc, StoreError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.error)
    else:
        logger.debug("%s %s rejected (%d): %s", request.method, request.url.path, exc.status_code, exc.error)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    headers = getattr(exc, "headers", None)
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        allowed = (headers or {}).get("Allow")
        error = MethodNotAllowedError(f"Method not allowed. Use {allowed}." if allowed else "Method not allowed.")
        return JSONResponse(status_code=error.status_code, content=error.to_dict(), headers=headers)
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request.", "message": "; ".join(err.get("msg", "") for err in exc.errors())},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error", "message": GENERIC_STORE_MESSAGE},
    )


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        app_settings: Settings to run with. If None, uses environment settings.

    Returns:
        The configured FastAPI app; services are created by its lifespan
    """
    app = FastAPI(
        title=API_TITLE,
        description="Paginated, searchable user directory with a file-based response cache",
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = app_settings or get_settings()

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def nosniff_header(request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        return response

    app.add_exception_handler(DirectoryError, directory_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": API_TITLE,
            "version": API_VERSION,
            "endpoints": {
                "users": "/users",
                "search": "/search",
                "delete": "/delete",
                "health": "/health",
                "docs": "/docs",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: HandlerDep) -> Any:
        """Health check endpoint."""
        result = await handler.health_check()
        if not result.database:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content=result.model_dump(),
            )
        return result

    @app.get("/users", response_model=UsersPageResponse, responses=_ERROR_RESPONSES)
    async def list_users(
        handler: HandlerDep,
        offset: str | None = None,
        limit: str | None = None,
    ) -> UsersPageResponse:
        """List active users, newest first by first name, one window at a time."""
        return await handler.list_users(offset, limit)

    @app.get(
        "/search",
        response_model=SearchResponse,
        responses={400: {"model": ErrorResponse}, **_ERROR_RESPONSES},
    )
    async def search_users(handler: HandlerDep, q: str | None = None) -> SearchResponse:
        """Search active users by first, last or full name."""
        return await handler.search(q)

    @app.post(
        "/delete",
        response_model=DeleteResponse,
        responses={
            400: {"model": ErrorResponse},
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse},
            **_ERROR_RESPONSES,
        },
    )
    async def delete_user(request: Request, handler: HandlerDep) -> DeleteResponse:
        """Soft-delete a user. Body: {"id": <positive int>}."""
        return await handler.delete_user(request)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "user_directory.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
