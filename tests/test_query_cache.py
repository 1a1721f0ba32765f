from __future__ import annotations

from agent_portal.query_cache import QueryCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def test_fetch_uses_cached_value_until_forced() -> None:
    cache = QueryCache()
    calls = []

    def loader():
        calls.append(1)
        return len(calls)

    assert cache.fetch(("/api/inventory",), loader) == 1
    assert cache.fetch(("/api/inventory",), loader) == 1
    assert cache.fetch(("/api/inventory",), loader, force_refresh=True) == 2
    assert len(calls) == 2


def test_invalidate_drops_every_key_with_prefix() -> None:
    cache = QueryCache()
    cache.set(("/api/notifications", 5, "all"), ["a"])
    cache.set(("/api/notifications", 5, "unread-count"), 3)
    cache.set(("/api/inventory",), ["b"])

    dropped = cache.invalidate(("/api/notifications",))

    assert dropped == 2
    assert ("/api/notifications", 5, "all") not in cache
    assert cache.get(("/api/inventory",)) == ["b"]


def test_ttl_expiry() -> None:
    clock = FakeClock()
    cache = QueryCache(ttl_seconds=30, now=clock)
    cache.set(("k",), "v")

    clock.now += 29
    assert cache.get(("k",)) == "v"
    clock.now += 2
    assert cache.get(("k",)) is None


def test_no_ttl_never_expires() -> None:
    clock = FakeClock()
    cache = QueryCache(now=clock)
    cache.set(("k",), "v")

    clock.now += 10_000

    assert cache.get(("k",)) == "v"


def test_loader_errors_are_not_cached() -> None:
    cache = QueryCache()

    def failing():
        raise RuntimeError("down")

    try:
        cache.fetch(("k",), failing)
    except RuntimeError:
        pass

    assert ("k",) not in cache
    assert len(cache) == 0


def test_len_counts_only_live_entries() -> None:
    clock = FakeClock()
    cache = QueryCache(ttl_seconds=30, now=clock)
    cache.set(("/api/agent/ledger", 5, "2024-01-01", None), ["old"])
    clock.now += 20
    cache.set(("/api/agent/ledger", 5, "2024-02-01", None), ["new"])

    clock.now += 15

    assert len(cache) == 1
    assert ("/api/agent/ledger", 5, "2024-02-01", None) in cache


def test_oldest_keys_are_evicted_past_max_entries() -> None:
    cache = QueryCache(max_entries=2)
    cache.set(("/api/agent/ledger", 5, "2024-01-01", None), 1)
    cache.set(("/api/agent/ledger", 5, "2024-02-01", None), 2)
    cache.set(("/api/agent/ledger", 5, "2024-01-01", None), 3)
    cache.set(("/api/agent/ledger", 5, "2024-03-01", None), 4)

    assert len(cache) == 2
    assert ("/api/agent/ledger", 5, "2024-02-01", None) not in cache
    assert cache.get(("/api/agent/ledger", 5, "2024-01-01", None)) == 3
