import asyncio
import pytest
from unittest.mock import AsyncMock
from utils.ttl_cache import TTLCache


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


class TestTTLCache:
    """Tests for expiry and eviction."""

    def test_put_and_get(self, clock):
        cache = TTLCache(ttl_seconds=10, max_entries=5, clock=clock)
        cache.put("q", ("a",))
        assert cache.get("q") == ("a",)
        assert "q" in cache

    def test_expire_after_write(self, clock):
        cache = TTLCache(ttl_seconds=10, max_entries=5, clock=clock)
        cache.put("q", ("a",))
        clock.now = 9.9
        assert cache.get("q") == ("a",)
        clock.now = 10.0
        assert cache.get("q") is None
        assert len(cache) == 0

    def test_read_does_not_extend_ttl(self, clock):
        cache = TTLCache(ttl_seconds=10, max_entries=5, clock=clock)
        cache.put("q", 1)
        clock.now = 8
        cache.get("q")
        clock.now = 12
        assert cache.get("q") is None

    def test_lru_eviction(self, clock):
        cache = TTLCache(ttl_seconds=100, max_entries=2, clock=clock)
        cache.put("a", 1)
        cache.put("b", 2)
        cache.get("a")
        cache.put("c", 3)
        assert cache.get("b") is None
        assert cache.get("a") == 1
        assert cache.get("c") == 3

    def test_expired_evicted_before_lru(self, clock):
        cache = TTLCache(ttl_seconds=10, max_entries=2, clock=clock)
        cache.put("old", 1)
        clock.now = 5
        cache.put("recent", 2)
        cache.get("old")
        clock.now = 11
        cache.put("new", 3)
        assert len(cache) == 2
        assert cache.get("recent") == 2
        assert cache.get("new") == 3

    def test_empty_value_is_cached(self, clock):
        cache = TTLCache(ttl_seconds=10, max_entries=2, clock=clock)
        cache.put("q", ())
        assert cache.get("q") == ()

    def test_invalidate_and_clear(self, clock):
        cache = TTLCache(ttl_seconds=10, max_entries=5, clock=clock)
        cache.put("a", 1)
        cache.put("b", 2)
        cache.invalidate("a")
        assert cache.get("a") is None
        cache.clear()
        assert len(cache) == 0

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            TTLCache(ttl_seconds=10, max_entries=0)


@pytest.mark.asyncio
class TestGetOrCompute:
    """Tests for single-flight computation."""

    async def test_computes_once(self, clock):
        cache = TTLCache(ttl_seconds=10, max_entries=5, clock=clock)
        compute = AsyncMock(return_value=("hit",))
        assert await cache.get_or_compute("q", compute) == ("hit",)
        assert await cache.get_or_compute("q", compute) == ("hit",)
        compute.assert_awaited_once()

    async def test_concurrent_callers_share_computation(self, clock):
        cache = TTLCache(ttl_seconds=10, max_entries=5, clock=clock)
        calls = 0
        release = asyncio.Event()

        async def compute():
            nonlocal calls
            calls += 1
            await release.wait()
            return ("shared",)

        tasks = [asyncio.create_task(cache.get_or_compute("q", compute)) for _ in range(5)]
        await asyncio.sleep(0)
        release.set()
        results = await asyncio.gather(*tasks)

        assert calls == 1
        assert all(r == ("shared",) for r in results)

    async def test_failure_not_cached(self, clock):
        cache = TTLCache(ttl_seconds=10, max_entries=5, clock=clock)
        failing = AsyncMock(side_effect=RuntimeError("boom"))
        with pytest.raises(RuntimeError):
            await cache.get_or_compute("q", failing)

        compute = AsyncMock(return_value=("ok",))
        assert await cache.get_or_compute("q", compute) == ("ok",)

    async def test_recomputes_after_expiry(self, clock):
        cache = TTLCache(ttl_seconds=10, max_entries=5, clock=clock)
        compute = AsyncMock(side_effect=[("first",), ("second",)])
        assert await cache.get_or_compute("q", compute) == ("first",)
        clock.now = 20
        assert await cache.get_or_compute("q", compute) == ("second",)

    async def test_owner_cancel_hands_over_to_waiter(self, clock):
        cache = TTLCache(ttl_seconds=10, max_entries=5, clock=clock)
        started = asyncio.Event()

        async def hanging():
            started.set()
            await asyncio.Event().wait()

        owner = asyncio.create_task(cache.get_or_compute("q", hanging))
        await started.wait()
        waiter = asyncio.create_task(cache.get_or_compute("q", AsyncMock(return_value=("late",))))
        for _ in range(3):
            await asyncio.sleep(0)

        owner.cancel()
        with pytest.raises(asyncio.CancelledError):
            await owner

        assert await waiter == ("late",)
        assert cache.get("q") == ("late",)

    async def test_waiter_cancel_leaves_owner_alone(self, clock):
        cache = TTLCache(ttl_seconds=10, max_entries=5, clock=clock)
        release = asyncio.Event()

        async def compute():
            await release.wait()
            return ("owner",)

        owner = asyncio.create_task(cache.get_or_compute("q", compute))
        await asyncio.sleep(0)
        waiter = asyncio.create_task(cache.get_or_compute("q", compute))
        await asyncio.sleep(0)

        waiter.cancel()
        with pytest.raises(asyncio.CancelledError):
            await waiter

        release.set()
        assert await owner == ("owner",)

    async def test_built_outside_event_loop(self, clock):
        loop = asyncio.get_running_loop()
        cache = await loop.run_in_executor(None, lambda: TTLCache(ttl_seconds=10, max_entries=5, clock=clock))
        assert await cache.get_or_compute("q", AsyncMock(return_value=("ok",))) == ("ok",)
