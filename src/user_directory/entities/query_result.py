"""Query and mutation result entities."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class QueryResult:
    """Outcome of a read-through query.

    Attributes:
        body: The JSON-ready response body, identical whether it came
            from the cache or the store
        cached: Whether the response cache satisfied the request
    """

    body: dict[str, Any]
    cached: bool


@dataclass(frozen=True)
class DeleteResult:
    """Outcome of a successful soft delete."""

    user_id: int
    total: int
    message: str = "User deleted successfully."
