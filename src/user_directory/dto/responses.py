"""Response DTOs for API endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class UserItem(BaseModel):
    """Public view of a user record (status is never exposed)."""

    id: int = Field(..., description="User id", ge=1)
    fname: str = Field(..., description="First name")
    lname: str = Field(..., description="Last name")
    email: str = Field(..., description="Email address")
    review: str | None = Field(None, description="Free-form review text, passed through unmodified")
    created_at: str | None = Field(None, description="Creation timestamp as stored")


class UsersPageResponse(BaseModel):
    """Response DTO for GET /users."""

    model_config = ConfigDict(populate_by_name=True)

    users: list[UserItem] = Field(default_factory=list, description="Page of active users")
    total: int = Field(..., description="Number of active users", ge=0)
    has_more: bool = Field(..., alias="hasMore", description="Whether offset + limit < total")
    cached: bool = Field(..., description="Whether the response cache served this request")
    load_time: float = Field(..., alias="loadTime", description="Server time in milliseconds")


class SearchResponse(BaseModel):
    """Response DTO for GET /search."""

    model_config = ConfigDict(populate_by_name=True)

    users: list[UserItem] = Field(default_factory=list, description="First matches")
    match_total: int = Field(..., alias="matchTotal", description="Number of all matching active users", ge=0)
    total: int = Field(..., description="Number of active users", ge=0)
    cached: bool = Field(..., description="Whether the response cache served this request")
    load_time: float = Field(..., alias="loadTime", description="Server time in milliseconds")


class DeleteResponse(BaseModel):
    """Response DTO for POST /delete."""

    success: bool = Field(..., description="Whether the operation succeeded")
    total: int = Field(..., description="Number of active users after the delete", ge=0)
    message: str = Field(..., description="Human-readable status message")


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str = Field(..., description="Short description of the failure")
    message: str | None = Field(None, description="Optional detail safe to show to users")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    database: bool = Field(..., description="Whether the record store is reachable")
    cache_entries: int = Field(..., description="Entries currently in the response cache", ge=0)
