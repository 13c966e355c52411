"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .mutation_service import MutationService, parse_user_id
from .query_service import QueryService, normalize_search_term

__all__ = [
    "MutationService",
    "QueryService",
    "normalize_search_term",
    "parse_user_id",
]
