"""Request DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class DeleteUserRequest(BaseModel):
    """Request DTO for the soft delete.

    ``id`` is kept as sent so the service can reject booleans, floats
    and other look-alikes with a 400 instead of coercing them.
    """

    id: Any = Field(None, description="Positive integer id of the user to delete", examples=[42])
