import threading
from concurrent.futures import ThreadPoolExecutor

import pytest


def test_get_missing_returns_none(cache) -> None:
    assert cache.get("nope") is None


def test_put_then_get_until_expiry(cache, clock) -> None:
    cache.put("k", [1, 2], ttl_seconds=300)
    assert cache.get("k") == [1, 2]

    clock.advance(299)
    assert cache.get("k") == [1, 2]

    clock.advance(1)
    assert cache.get("k") is None


def test_get_or_set_loads_once_while_fresh(cache, clock) -> None:
    calls = []

    def loader():
        calls.append(1)
        return len(calls)

    assert cache.get_or_set("k", 60, loader) == 1
    assert cache.get_or_set("k", 60, loader) == 1
    clock.advance(61)
    assert cache.get_or_set("k", 60, loader) == 2


def test_loader_errors_are_not_cached(cache) -> None:
    def broken():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        cache.get_or_set("k", 60, broken)
    assert cache.get("k") is None
    assert cache.get_or_set("k", 60, lambda: "ok") == "ok"


def test_none_values_are_not_cached(cache) -> None:
    assert cache.get_or_set("k", 60, lambda: None) is None
    assert cache.get_or_set("k", 60, lambda: "later") == "later"


def test_invalidate_and_clear(cache) -> None:
    cache.put("a", 1, 60)
    cache.put("b", 2, 60)
    cache.invalidate("a")
    cache.invalidate("missing")
    assert cache.get("a") is None
    assert cache.get("b") == 2
    cache.clear()
    assert cache.get("b") is None


def test_concurrent_reads_of_expired_entry(cache, clock) -> None:
    cache.put("k", "old", ttl_seconds=10)
    clock.advance(11)
    start = threading.Barrier(8)

    def read():
        start.wait()
        return cache.get_or_set("k", 10, lambda: "new")

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = [f.result() for f in [pool.submit(read) for _ in range(8)]]

    assert results == ["new"] * 8
