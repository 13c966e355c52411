"""User record domain entity."""

from dataclasses import dataclass
from datetime import datetime

STATUS_ACTIVE = "active"
STATUS_DELETED = "deleted"

# Ids are stored in a signed 64-bit integer column
MAX_USER_ID = 2**63 - 1


@dataclass(frozen=True)
class UserRecord:
    """Domain entity for a row of the ``users`` table.

    Attributes:
        id: Positive, unique and immutable identifier
        fname: First name
        lname: Last name
        email: Email address
        review: Opaque text passed through unmodified
        created_at: When the record was created
        status: Either "active" or "deleted" (terminal)
    """

    id: int
    fname: str
    lname: str
    email: str
    review: str | None
    created_at: datetime | None
    status: str = STATUS_ACTIVE
