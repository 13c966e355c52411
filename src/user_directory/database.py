"""Schema and engine construction for the record store.

The engine is the process-wide connection pool. It is created once by the
application lifespan, handed explicitly to the repository, and disposed on
shutdown.
"""

import logging
from pathlib import Path

from sqlalchemy import (
    Column,
    DateTime,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    create_engine,
    event,
    func,
)
from sqlalchemy.engine import Engine, make_url

from user_directory.config import settings
from user_directory.entities import STATUS_ACTIVE

logger = logging.getLogger(__name__)

metadata = MetaData()

users_table = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("fname", String(100), nullable=False),
    Column("lname", String(100), nullable=False),
    Column("email", String(255), nullable=False),
    Column("review", Text, nullable=True),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
    Column("status", String(16), nullable=False, server_default=STATUS_ACTIVE),
    Index("idx_users_status_fname", "status", "fname"),
)


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def _register_sqlite_functions(dbapi_connection, connection_record) -> None:
    # SQLite's built-in lower() only folds ASCII letters
    dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


def create_database_engine(database_url: str | None = None, pool_size: int | None = None) -> Engine:
    """Create the pooled engine for the configured database.

    Args:
        database_url: SQLAlchemy URL. If None, uses settings.
        pool_size: Connection pool size for server databases. If None, uses settings.

    Returns:
        A SQLAlchemy Engine
    """
    url = make_url(database_url or settings.database_url)
    options: dict = {"future": True, "pool_pre_ping": True}

    if url.get_backend_name() == "sqlite":
        if url.database and url.database != ":memory:":
            Path(url.database).expanduser().parent.mkdir(parents=True, exist_ok=True)
        # Concurrent writers wait on the database lock instead of failing fast
        options["connect_args"] = {"timeout": 30}
    else:
        options["pool_size"] = pool_size or settings.database_pool_size

    logger.info("Opening database engine for %s", url.render_as_string(hide_password=True))
    engine = create_engine(url, **options)
    if url.get_backend_name() == "sqlite":
        event.listen(engine, "connect", _register_sqlite_functions)
    return engine
