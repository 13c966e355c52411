"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import DeleteUserRequest
from .responses import (
    DeleteResponse,
    ErrorResponse,
    HealthCheckResponse,
    SearchResponse,
    UserItem,
    UsersPageResponse,
)

__all__ = [
    "DeleteUserRequest",
    "DeleteResponse",
    "ErrorResponse",
    "HealthCheckResponse",
    "SearchResponse",
    "UserItem",
    "UsersPageResponse",
]
