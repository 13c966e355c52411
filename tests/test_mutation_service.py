"""
Tests for the soft delete.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy import text

from conftest import numbered_users
from user_directory.entities import STATUS_DELETED, PageWindow
from user_directory.errors import ConflictError, NotFoundError, StoreError, ValidationError


def test_delete_lowers_total_and_invalidates_cache(repository, queries, mutations, response_cache):
    """A successful delete recounts and wipes every cached response."""
    repository.insert_users(numbered_users(5))
    queries.list_users(PageWindow())
    queries.search_users("user")
    assert response_cache.count() == 2

    result = mutations.delete_user(3)

    assert result.total == 4
    assert result.message == "User deleted successfully."
    assert response_cache.count() == 0
    assert repository.get_status(3) == STATUS_DELETED

    listing = queries.list_users(PageWindow())
    assert listing.cached is False
    assert 3 not in [user["id"] for user in listing.body["users"]]


def test_delete_unknown_user(repository, mutations):
    """A missing id is NotFound."""
    repository.insert_users(numbered_users(1))
    with pytest.raises(NotFoundError):
        mutations.delete_user(99)


def test_repeated_delete_is_always_conflict(repository, mutations):
    """Deleting an already-deleted user never succeeds again."""
    repository.insert_users(numbered_users(2))
    mutations.delete_user(1)

    for _ in range(3):
        with pytest.raises(ConflictError):
            mutations.delete_user(1)

    assert repository.count_active() == 1


def test_failed_delete_keeps_cache(repository, queries, mutations, response_cache):
    """Failures change nothing, including the cache."""
    repository.insert_users(numbered_users(2))
    mutations.delete_user(2)
    queries.list_users(PageWindow())

    with pytest.raises(ConflictError):
        mutations.delete_user(2)
    with pytest.raises(NotFoundError):
        mutations.delete_user(50)

    assert response_cache.count() == 1


@pytest.mark.parametrize("raw_id", [0, -4, True, 1.5, "abc", "", None, [1], {"id": 1}, 2**63, str(10**20)])
def test_delete_rejects_invalid_ids(repository, mutations, raw_id):
    """Ids must be positive integers."""
    repository.insert_users(numbered_users(1))
    with pytest.raises(ValidationError):
        mutations.delete_user(raw_id)
    assert repository.count_active() == 1


def test_delete_accepts_numeric_string(repository, mutations):
    """A string of digits is a valid id."""
    repository.insert_users(numbered_users(1))
    assert mutations.delete_user(" 1 ").total == 0


def test_concurrent_deletes_have_one_winner(repository, mutations):
    """Of N simultaneous deletes exactly one succeeds."""
    repository.insert_users(numbered_users(3))
    attempts = 8

    def attempt(_):
        try:
            mutations.delete_user(2)
            return "success"
        except ConflictError:
            return "conflict"

    with ThreadPoolExecutor(max_workers=attempts) as pool:
        outcomes = list(pool.map(attempt, range(attempts)))

    assert outcomes.count("success") == 1
    assert outcomes.count("conflict") == attempts - 1
    assert repository.get_status(2) == STATUS_DELETED
    assert repository.count_active() == 2


def test_store_failure_becomes_store_error(repository, engine, mutations):
    """Driver errors surface as StoreError with a generic message."""
    with engine.begin() as conn:
        conn.execute(text("DROP TABLE users"))

    with pytest.raises(StoreError) as excinfo:
        mutations.delete_user(1)

    assert excinfo.value.message == "An internal error occurred."
    assert excinfo.value.__cause__ is not None


def test_oversized_id_in_store_call_becomes_store_error(repository):
    """Driver overflow on a bound integer is reported like any store failure."""
    with pytest.raises(StoreError):
        repository.get_status(10**20)


def test_recount_failure_still_invalidates_cache(repository, queries, mutations, response_cache, monkeypatch):
    """Once the update commits the cache is wiped, even if the recount fails."""
    repository.insert_users(numbered_users(3))
    queries.list_users(PageWindow())
    assert response_cache.count() == 1

    def failing_count():
        raise StoreError("Record store failure")

    monkeypatch.setattr(repository, "count_active", failing_count)

    with pytest.raises(StoreError):
        mutations.delete_user(2)

    assert response_cache.count() == 0
    assert repository.get_status(2) == STATUS_DELETED
