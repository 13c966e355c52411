"""
Shared fixtures for the user directory tests.

Every test gets its own SQLite file and cache directory under tmp_path.
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from user_directory.api.app import create_app
from user_directory.config import Settings
from user_directory.database import create_database_engine
from user_directory.repositories import FileResponseCache, SqlUserRepository
from user_directory.services import MutationService, QueryService


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_user(fname: str, lname: str, **extra) -> dict:
    """Build a users row for insert_users."""
    row = {
        "fname": fname,
        "lname": lname,
        "email": f"{fname}.{lname}@example.com".lower(),
        "review": f"Review of {fname}",
    }
    row.update(extra)
    return row


def numbered_users(count: int) -> list[dict]:
    """Build ``count`` users named User001, User002, ..."""
    return [make_user(f"User{index:03d}", "Sample") for index in range(1, count + 1)]


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway database and cache directory."""
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'directory.sqlite3'}",
        cache_dir=str(tmp_path / "cache"),
        cache_ttl=60,
    )


@pytest.fixture
def engine(settings: Settings):
    """Pooled engine, disposed after the test."""
    engine = create_database_engine(settings.database_url)
    yield engine
    engine.dispose()


@pytest.fixture
def repository(engine) -> SqlUserRepository:
    """Repository with the users table created."""
    repo = SqlUserRepository(engine=engine)
    repo.initialize()
    return repo


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def response_cache(settings: Settings, clock: FakeClock):
    """Disk cache driven by the fake clock, closed after the test."""
    cache = FileResponseCache(cache_dir=settings.cache_dir, ttl=settings.cache_ttl, clock=clock)
    yield cache
    cache.close()


@pytest.fixture
def queries(repository: SqlUserRepository, response_cache: FileResponseCache) -> QueryService:
    return QueryService.create(store=repository, cache=response_cache)


@pytest.fixture
def mutations(repository: SqlUserRepository, response_cache: FileResponseCache) -> MutationService:
    return MutationService.create(store=repository, cache=response_cache)


@pytest.fixture
def client(settings: Settings):
    """Test client with the lifespan running against the temp settings."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def app_repository(client: TestClient) -> SqlUserRepository:
    """The repository created by the app lifespan, for seeding."""
    return client.app.state.repository
