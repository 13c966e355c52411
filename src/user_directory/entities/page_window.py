"""Pagination window entity."""

from dataclasses import dataclass
from typing import Any

DEFAULT_OFFSET = 0
DEFAULT_LIMIT = 10
MAX_LIMIT = 50

# Largest value a signed 64-bit SQL integer parameter can hold
MAX_OFFSET = 2**63 - 1


def _parse_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        parsed = value
    else:
        try:
            parsed = int(str(value).strip())
        except ValueError:
            return None
    if not -MAX_OFFSET - 1 <= parsed <= MAX_OFFSET:
        return None
    return parsed


@dataclass(frozen=True)
class PageWindow:
    """Offset/limit window for the paginated listing.

    Request-scoped, never persisted. ``offset`` is always >= 0 and
    ``limit`` always lies in [1, MAX_LIMIT].
    """

    offset: int = DEFAULT_OFFSET
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_raw(cls, offset: Any = None, limit: Any = None) -> "PageWindow":
        """Build a window from untrusted query values.

        Missing, unparseable or out-of-range values fall back to the
        defaults instead of raising.
        """
        parsed_offset = _parse_int(offset)
        if parsed_offset is None or parsed_offset < 0:
            parsed_offset = DEFAULT_OFFSET

        parsed_limit = _parse_int(limit)
        if parsed_limit is None or not 1 <= parsed_limit <= MAX_LIMIT:
            parsed_limit = DEFAULT_LIMIT

        return cls(offset=parsed_offset, limit=parsed_limit)

    def has_more(self, total: int) -> bool:
        return self.offset + self.limit < total
