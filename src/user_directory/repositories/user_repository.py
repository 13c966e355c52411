"""SQL implementation of UserStore.

Queries are built with SQLAlchemy Core against the ``users`` table, so
every value reaches the database as a bound parameter.
"""

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from sqlalchemy import String, func, insert, or_, select, update
from sqlalchemy.engine import Engine, RowMapping
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.elements import ColumnElement

from user_directory.database import create_database_engine, metadata, users_table
from user_directory.entities import STATUS_ACTIVE, STATUS_DELETED, UserRecord
from user_directory.errors import StoreError

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    """Translate driver failures into StoreError, logging the original."""
    try:
        yield
    except (SQLAlchemyError, OverflowError) as exc:
        logger.exception("Record store failure during %s", operation)
        raise StoreError("Record store failure") from exc


def _like_pattern(term: str) -> str:
    escaped = (
        term.lower()
        .replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return f"%{escaped}%"


def _search_predicate(term: str) -> ColumnElement[bool]:
    pattern = _like_pattern(term)
    full_name = users_table.c.fname + " " + users_table.c.lname
    return or_(
        *(
            func.lower(column, type_=String).like(pattern, escape=LIKE_ESCAPE)
            for column in (users_table.c.fname, users_table.c.lname, full_name)
        )
    )


def _to_record(row: RowMapping) -> UserRecord:
    return UserRecord(
        id=row["id"],
        fname=row["fname"],
        lname=row["lname"],
        email=row["email"],
        review=row["review"],
        created_at=row["created_at"],
        status=row["status"],
    )


_is_active = users_table.c.status == STATUS_ACTIVE


class SqlUserRepository:
    """Relational implementation of the user record store.

    This class satisfies the UserStore protocol through structural
    typing. It never opens its own engine implicitly: the pooled engine
    is passed in and its lifecycle belongs to the caller.
    """

    def __init__(self, engine: Engine) -> None:
        """Initialize the repository.

        Args:
            engine: Pooled SQLAlchemy engine shared by all requests.
        """
        self._engine = engine

    @classmethod
    def create(cls, engine: Engine | None = None) -> "SqlUserRepository":
        """Factory method to create SqlUserRepository with defaults.

        Args:
            engine: Engine to use. If None, one is built from settings.

        Returns:
            Configured SqlUserRepository
        """
        return cls(engine=engine or create_database_engine())

    def initialize(self) -> None:
        """Create the users table and its index if they do not exist."""
        with _store_errors("schema bootstrap"):
            metadata.create_all(self._engine)

    def count_active(self) -> int:
        stmt = select(func.count()).select_from(users_table).where(_is_active)
        with _store_errors("count active users"), self._engine.connect() as conn:
            return int(conn.execute(stmt).scalar_one())

    def fetch_page(self, offset: int, limit: int) -> list[UserRecord]:
        stmt = (
            select(users_table)
            .where(_is_active)
            .order_by(users_table.c.fname.desc(), users_table.c.id.desc())
            .limit(limit)
            .offset(offset)
        )
        with _store_errors("fetch users"), self._engine.connect() as conn:
            return [_to_record(row) for row in conn.execute(stmt).mappings()]

    def search(self, term: str, limit: int) -> list[UserRecord]:
        stmt = (
            select(users_table)
            .where(_is_active, _search_predicate(term))
            .order_by(users_table.c.fname.asc(), users_table.c.lname.asc(), users_table.c.id.asc())
            .limit(limit)
        )
        with _store_errors("search users"), self._engine.connect() as conn:
            return [_to_record(row) for row in conn.execute(stmt).mappings()]

    def count_matches(self, term: str) -> int:
        stmt = select(func.count()).select_from(users_table).where(_is_active, _search_predicate(term))
        with _store_errors("count search matches"), self._engine.connect() as conn:
            return int(conn.execute(stmt).scalar_one())

    def get_status(self, user_id: int) -> str | None:
        stmt = select(users_table.c.status).where(users_table.c.id == user_id)
        with _store_errors("read user status"), self._engine.connect() as conn:
            return conn.execute(stmt).scalar_one_or_none()

    def mark_deleted(self, user_id: int) -> bool:
        # The status guard makes this a compare-and-set: of several
        # concurrent callers only one sees a changed row.
        stmt = (
            update(users_table)
            .where(users_table.c.id == user_id, _is_active)
            .values(status=STATUS_DELETED)
        )
        with _store_errors("soft delete"), self._engine.begin() as conn:
            changed = conn.execute(stmt).rowcount
        return changed == 1

    def insert_users(self, records: Iterable[dict]) -> int:
        rows = list(records)
        if not rows:
            return 0
        with _store_errors("insert users"), self._engine.begin() as conn:
            conn.execute(insert(users_table), rows)
        return len(rows)

    def health_check(self) -> bool:
        try:
            with self._engine.connect() as conn:
                conn.execute(select(1))
            return True
        except SQLAlchemyError as exc:
            logger.warning("Record store health check failed: %s", exc)
            return False

    @property
    def engine(self) -> Engine:
        """Get the underlying engine (for lifecycle management)."""
        return self._engine
