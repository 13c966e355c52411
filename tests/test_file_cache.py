"""
Tests for the file-backed response cache.
"""

import threading

from diskcache import Cache, JSONDisk

from user_directory.repositories import FileResponseCache


def test_build_key_is_order_insensitive(response_cache):
    """Parameter order does not change the key."""
    first = response_cache.build_key("users", {"offset": 10, "limit": 5})
    second = response_cache.build_key("users", {"limit": 5, "offset": 10})
    assert first == second


def test_build_key_lowercases_strings(response_cache):
    """Equivalent searches collapse to one slot."""
    assert response_cache.build_key("search", {"q": "Ada"}) == response_cache.build_key("search", {"q": "ada"})


def test_build_key_separates_endpoints_and_values(response_cache):
    """Different endpoints or values get different keys."""
    keys = {
        response_cache.build_key("users", {"offset": 0, "limit": 10}),
        response_cache.build_key("users", {"offset": 10, "limit": 10}),
        response_cache.build_key("search", {"offset": 0, "limit": 10}),
    }
    assert len(keys) == 3


def test_put_then_get(response_cache):
    """A fresh entry is returned as stored."""
    body = {"users": [{"id": 1}], "total": 1}
    response_cache.put("k1", body)
    assert response_cache.get("k1") == body


def test_get_missing_key(response_cache):
    """Unknown keys are a miss."""
    assert response_cache.get("nope") is None


def test_entry_expires_after_ttl(response_cache, clock):
    """Entries are valid strictly inside the TTL window."""
    response_cache.put("k1", {"total": 1})

    clock.advance(59.9)
    assert response_cache.get("k1") == {"total": 1}

    clock.advance(0.1)
    assert response_cache.get("k1") is None


def test_stale_entry_is_not_deleted_by_reads(response_cache, clock):
    """The read path reports a miss but leaves the entry alone."""
    response_cache.put("k1", {"total": 1})
    clock.advance(120)

    assert response_cache.get("k1") is None
    assert response_cache.count() == 1


def test_put_overwrites(response_cache):
    """The latest write wins."""
    response_cache.put("k1", {"total": 1})
    response_cache.put("k1", {"total": 2})
    assert response_cache.get("k1") == {"total": 2}


def test_corrupt_entry_is_a_miss(response_cache, settings):
    """Malformed values on disk degrade to a miss instead of raising."""
    response_cache.put("k1", {"total": 1})

    with Cache(settings.cache_dir, disk=JSONDisk) as raw:
        raw.set("k1", "not an entry")
        assert response_cache.get("k1") is None

        raw.set("k1", {"cached_at": "soon", "body": {}})
        assert response_cache.get("k1") is None

        raw.set("k1", {"cached_at": 0, "body": [1, 2]})
        assert response_cache.get("k1") is None


def test_invalidate_all_removes_every_entry(response_cache, clock):
    """Fresh and stale entries are all removed."""
    response_cache.put("a", {"n": 1})
    clock.advance(600)
    response_cache.put("b", {"n": 2})
    response_cache.put("c", {"n": 3})

    assert response_cache.invalidate_all() == 3
    assert response_cache.count() == 0
    assert response_cache.get("b") is None


def test_invalidate_all_on_fresh_directory(tmp_path):
    """Invalidating a cache that never wrote anything is a no-op."""
    cache = FileResponseCache(cache_dir=tmp_path / "missing", ttl=60)
    try:
        assert (tmp_path / "missing").is_dir()
        assert cache.invalidate_all() == 0
        assert cache.count() == 0
    finally:
        cache.close()


def test_concurrent_puts_leave_a_complete_entry(response_cache):
    """Racing writers of one key leave exactly one whole entry."""
    bodies = [{"writer": n, "payload": "x" * 5000} for n in range(8)]
    barrier = threading.Barrier(len(bodies))

    def write(body):
        barrier.wait()
        response_cache.put("shared", body)

    threads = [threading.Thread(target=write, args=(body,)) for body in bodies]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert response_cache.get("shared") in bodies
    assert response_cache.count() == 1
