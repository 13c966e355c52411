"""Record store protocol.

Defines the interface for the relational table of user records. Only
the soft-delete status transition is ever written.
"""

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from user_directory.entities import UserRecord


@runtime_checkable
class UserStore(Protocol):
    """Protocol for user record stores.

    Implementations must translate backend failures into
    ``user_directory.errors.StoreError``.
    """

    def count_active(self) -> int:
        """Count records with status "active"."""
        ...

    def fetch_page(self, offset: int, limit: int) -> list[UserRecord]:
        """Fetch a window of active records ordered by (fname DESC, id DESC).

        Args:
            offset: Number of rows to skip
            limit: Maximum number of rows to return
        """
        ...

    def search(self, term: str, limit: int) -> list[UserRecord]:
        """Find active records whose first, last or full name contains term.

        Matching is case-insensitive; results are ordered by
        (fname ASC, lname ASC, id ASC).

        Args:
            term: Substring to look for
            limit: Maximum number of rows to return
        """
        ...

    def count_matches(self, term: str) -> int:
        """Count every active record matching the search predicate."""
        ...

    def get_status(self, user_id: int) -> str | None:
        """Return the status of a record, or None if it does not exist."""
        ...

    def mark_deleted(self, user_id: int) -> bool:
        """Atomically move a record from "active" to "deleted".

        Returns:
            True if this call performed the transition, False if no
            active record with that id existed when the update ran
        """
        ...

    def insert_users(self, records: Iterable[dict]) -> int:
        """Bulk insert user rows. Returns the number inserted."""
        ...

    def health_check(self) -> bool:
        """Check if the store is reachable."""
        ...
