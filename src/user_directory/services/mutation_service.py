"""Mutation service for the soft delete."""

import logging
import re
from typing import Any

from user_directory.entities import MAX_USER_ID, DeleteResult
from user_directory.errors import ConflictError, NotFoundError, ValidationError
from user_directory.protocols import ResponseCache, UserStore

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"[0-9]+")


def parse_user_id(value: Any) -> int:
    """Validate a user id taken from a request body.

    Accepts a positive integer or a string of digits, up to the largest
    id the users table can hold. Booleans and floats are rejected.

    Raises:
        ValidationError: If the value is not a positive integer
    """
    if isinstance(value, bool):
        parsed = None
    elif isinstance(value, int):
        parsed = value
    elif isinstance(value, str) and _DIGITS.fullmatch(value.strip()):
        parsed = int(value.strip())
    else:
        parsed = None

    if parsed is None or not 1 <= parsed <= MAX_USER_ID:
        raise ValidationError("Invalid user ID. Must be a positive integer.")
    return parsed


class MutationService:
    """Write side of the directory: the active -> deleted transition.

    Example:
        ```python
        mutations = MutationService.create(store=repository, cache=response_cache)
        result = mutations.delete_user(42)
        result.total
        ```
    """

    def __init__(self, store: UserStore, cache: ResponseCache) -> None:
        """Initialize the mutation service.

        Args:
            store: Record store (required).
            cache: Response cache invalidated after every successful delete.
        """
        self._store = store
        self._cache = cache

    @classmethod
    def create(cls, store: UserStore, cache: ResponseCache) -> "MutationService":
        """Factory method to create MutationService."""
        return cls(store=store, cache=cache)

    def delete_user(self, user_id: Any) -> DeleteResult:
        """Soft-delete a user.

        Business logic:
        1. Validate the id
        2. Run the conditional update guarded by status = 'active'
        3. If no row changed, read the status to tell NotFound from Conflict
        4. On success drop every cached response, then recount active users

        Args:
            user_id: Raw id from the request body

        Returns:
            DeleteResult with the new active total

        Raises:
            ValidationError: If the id is not a positive integer
            NotFoundError: If no record has this id
            ConflictError: If the record is already deleted or a concurrent
                delete won the race
        """
        user_id = parse_user_id(user_id)

        if not self._store.mark_deleted(user_id):
            status = self._store.get_status(user_id)
            if status is None:
                raise NotFoundError("User not found.")
            logger.info("Delete of user %d rejected, status is %s", user_id, status)
            raise ConflictError("User already deleted.")

        # The update has committed; invalidate before the recount can fail
        self._cache.invalidate_all()
        total = self._store.count_active()
        logger.info("Soft-deleted user %d, %d active users remain", user_id, total)

        return DeleteResult(user_id=user_id, total=total)
