import asyncio
import time
from collections import OrderedDict
from typing import Awaitable, Callable, Dict, Generic, Hashable, Optional, Tuple, TypeVar

from config.constants import CACHE_CONFIG

V = TypeVar("V")


class TTLCache(Generic[V]):
    """
    Bounded in-memory store with expire-after-write and LRU eviction.

    Expired entries are dropped first; if the store is still over capacity
    the least recently used entries go. Timestamps come from a monotonic
    clock, injectable for tests.
    """

    def __init__(
        self,
        ttl_seconds: float = CACHE_CONFIG.TTL_SECONDS,
        max_entries: int = CACHE_CONFIG.MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_entries < 1:
            raise ValueError("max_entries must be positive")
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[Hashable, Tuple[float, V]]" = OrderedDict()
        self._inflight: Dict[Hashable, asyncio.Future] = {}
        # created on first use, inside the running loop
        self._lock: Optional[asyncio.Lock] = None

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key) is not None

    def _expired(self, written_at: float, now: float) -> bool:
        return now - written_at >= self.ttl_seconds

    def get(self, key: Hashable) -> Optional[V]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        written_at, value = entry
        if self._expired(written_at, self._clock()):
            del self._entries[key]
            return None
        self._entries.move_to_end(key)
        return value

    def put(self, key: Hashable, value: V) -> None:
        self._entries[key] = (self._clock(), value)
        self._entries.move_to_end(key)
        self._evict()

    def invalidate(self, key: Hashable) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def _evict(self) -> None:
        if len(self._entries) <= self.max_entries:
            return
        now = self._clock()
        for key in [k for k, (written_at, _) in self._entries.items() if self._expired(written_at, now)]:
            del self._entries[key]
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    async def get_or_compute(self, key: Hashable, compute: Callable[[], Awaitable[V]]) -> V:
        """
        Return the cached value for key, or run compute once and store its result.

        Concurrent callers for the same key await the same computation; a failed
        computation is not cached and its exception reaches every waiter. If the
        owning task is cancelled, a waiter takes the computation over instead of
        being cancelled with it.
        """
        if self._lock is None:
            self._lock = asyncio.Lock()

        while True:
            async with self._lock:
                cached = self.get(key)
                if cached is not None:
                    return cached
                pending = self._inflight.get(key)
                owner = pending is None
                if owner:
                    pending = asyncio.get_running_loop().create_future()
                    self._inflight[key] = pending

            if owner:
                return await self._compute(key, pending, compute)

            try:
                return await asyncio.shield(pending)
            except asyncio.CancelledError:
                if pending.cancelled():
                    # owner went away, retry as a new owner or waiter
                    continue
                raise

    async def _compute(self, key: Hashable, pending: asyncio.Future, compute: Callable[[], Awaitable[V]]) -> V:
        try:
            value = await compute()
        except BaseException as e:
            # no await until waiters are released
            if self._inflight.get(key) is pending:
                del self._inflight[key]
            if not pending.done():
                if isinstance(e, asyncio.CancelledError):
                    pending.cancel()
                else:
                    pending.set_exception(e)
                    # mark retrieved so an unobserved failure is not logged by the loop
                    pending.exception()
            raise

        async with self._lock:
            self.put(key, value)
            self._inflight.pop(key, None)
        if not pending.done():
            pending.set_result(value)
        return value
