import asyncio

import pytest

from tradefinder.external.cache import TTLCache


class FakeClock:

    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return TTLCache(ttl_seconds=60, clock=clock)


def test_fresh_entry_is_returned(cache, clock):
    cache.set("players:half", ["a", "b"])
    clock.advance(59.9)

    assert cache.get("players:half") == ["a", "b"]
    assert len(cache) == 1


def test_entry_expires_at_ttl(cache, clock):
    cache.set("players:half", ["a"])
    clock.advance(60)

    assert cache.get("players:half") is None
    assert len(cache) == 0


def test_missing_key(cache):
    assert cache.get("nope") is None


def test_set_refreshes_timestamp(cache, clock):
    cache.set("k", 1)
    clock.advance(50)
    cache.set("k", 2)
    clock.advance(50)

    assert cache.get("k") == 2


def test_invalidate_and_clear(cache):
    cache.set("a", 1)
    cache.set("b", 2)

    cache.invalidate("a")
    cache.invalidate("never-set")
    assert cache.get("a") is None
    assert cache.get("b") == 2

    cache.clear()
    assert len(cache) == 0


def test_zero_ttl_never_serves(clock):
    cache = TTLCache(ttl_seconds=0, clock=clock)
    cache.set("k", 1)

    assert cache.get("k") is None


def test_negative_ttl_rejected():
    with pytest.raises(ValueError):
        TTLCache(ttl_seconds=-1)


def test_get_or_fetch_fetches_once_until_expiry(cache, clock):
    calls = []

    async def fetch():
        calls.append(clock())
        return {"week": len(calls)}

    async def scenario():
        first = await cache.get_or_fetch("nfl:state", fetch)
        second = await cache.get_or_fetch("nfl:state", fetch)
        clock.advance(61)
        third = await cache.get_or_fetch("nfl:state", fetch)
        return first, second, third

    first, second, third = asyncio.run(scenario())

    assert first == second == {"week": 1}
    assert third == {"week": 2}
    assert len(calls) == 2


def test_get_or_fetch_does_not_cache_failures(cache):
    async def failing():
        raise RuntimeError("upstream down")

    async def working():
        return "ok"

    with pytest.raises(RuntimeError):
        asyncio.run(cache.get_or_fetch("k", failing))

    assert asyncio.run(cache.get_or_fetch("k", working)) == "ok"


def test_instances_do_not_share_entries(clock):
    first = TTLCache(ttl_seconds=60, clock=clock)
    second = TTLCache(ttl_seconds=60, clock=clock)

    first.set("k", 1)
    assert second.get("k") is None
