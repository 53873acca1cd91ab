"""Bounded, expiring cache whose concurrent lookups share one computation.

Entries live for a fixed time after creation, regardless of access. When the
cache is over capacity the oldest entry is evicted. A computation that fails
is not cached, so the next lookup tries again. If the caller running a
computation is cancelled, one of its waiters runs it instead.
"""

import asyncio
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Hashable, Optional, TypeVar

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass
class CacheEntry(Generic[V]):
    """A pending or completed computation and its absolute expiry time."""
    future: "asyncio.Future[V]"
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class ExpiringCache(Generic[K, V]):
    """Keyed get-or-compute cache with capacity and per-entry expiry.

    Must be used from a single event loop.
    """

    def __init__(
        self,
        capacity: int,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic
    ):
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")

        self.capacity = capacity
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: "OrderedDict[K, CacheEntry[V]]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def _live_entry(self, key: K) -> Optional[CacheEntry[V]]:
        entry = self._entries.get(key)
        if entry is not None and entry.is_expired(self._clock()):
            del self._entries[key]
            return None
        return entry

    def _evict(self) -> None:
        while len(self._entries) > self.capacity:
            key, _ = self._entries.popitem(last=False)
            logger.info(f"Cache full, removing oldest entry; {key}")

    def _discard(self, key: K, entry: CacheEntry[V]) -> None:
        if self._entries.get(key) is entry:
            del self._entries[key]

    async def get_or_compute(self, key: K, factory: Callable[[], Awaitable[V]]) -> V:
        """Get a cached value, or compute it with ``factory``.

        Args:
            key: Retrieval key
            factory: Coroutine function that MAY be called if nothing is cached

        Returns:
            The cached or computed value
        """
        while True:
            entry = self._live_entry(key)
            if entry is None:
                return await self._compute(key, factory)

            try:
                return await asyncio.shield(entry.future)
            except asyncio.CancelledError:
                # Only the computing caller was cancelled; take over from it
                if not entry.future.cancelled():
                    raise
                logger.debug(f"Computation of {key} was abandoned, retrying")

    async def _compute(self, key: K, factory: Callable[[], Awaitable[V]]) -> V:
        entry = CacheEntry(
            future=asyncio.get_running_loop().create_future(),
            expires_at=self._clock() + self.ttl_seconds
        )
        self._entries[key] = entry
        self._evict()

        try:
            value = await factory()
        except asyncio.CancelledError:
            self._discard(key, entry)
            entry.future.cancel()
            raise
        except Exception as e:
            self._discard(key, entry)
            entry.future.set_exception(e)
            # Waiters re-raise it; mark it retrieved for the case there are none
            entry.future.exception()
            raise

        entry.future.set_result(value)
        return value

    def get(self, key: K) -> Optional[V]:
        """Get a completed cached value, or None."""
        entry = self._live_entry(key)
        if entry is None or not entry.future.done() or entry.future.cancelled():
            return None
        if entry.future.exception() is not None:
            return None
        return entry.future.result()

    def invalidate(self, key: K) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()
