"""Simple in-memory TTL cache for Text-TV responses. No Redis needed.

Reads check expiry themselves, so a stale entry is never returned even if the
background sweep has not run yet. The sweep only exists to drop keys that are
written once and never read again.

All operations are synchronous and never await, so under asyncio they cannot
interleave with each other. Handlers do await between get() and set(), which
means two concurrent misses for the same key will both fetch upstream and both
write; the last write wins. There is no per-key locking or request coalescing.

Each process (stdio session or uvicorn worker) has its own cache instance.
"""

import asyncio
import logging
import time
from typing import Any, Callable, NamedTuple

from texttv_mcp.config import settings

logger = logging.getLogger(__name__)


class CacheEntry(NamedTuple):
    value: Any
    expires_at: float


class TTLCache:
    """String-keyed cache with a caller-supplied TTL per entry.

    ``get`` returns None for a miss, so None itself is not a cacheable value.
    """

    def __init__(
        self,
        sweep_interval: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._store: dict[str, CacheEntry] = {}
        self._sweep_interval = sweep_interval
        self._clock = clock
        self._sweeper: asyncio.Task | None = None
        self._destroyed = False

    def get(self, key: str) -> Any | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            del self._store[key]
            return None
        return entry.value

    def set(self, key: str, value: Any, ttl_seconds: float = 60) -> None:
        self._store[key] = CacheEntry(value, self._clock() + ttl_seconds)

    def has(self, key: str) -> bool:
        entry = self._store.get(key)
        if entry is None:
            return False
        if self._clock() >= entry.expires_at:
            del self._store[key]
            return False
        return True

    def delete(self, key: str) -> bool:
        return self._store.pop(key, None) is not None

    def clear(self) -> None:
        self._store.clear()

    @property
    def size(self) -> int:
        """Stored entries, including expired ones the sweep has not removed yet."""
        return len(self._store)

    def cleanup(self) -> int:
        """Drop every expired entry. Returns how many were removed."""
        now = self._clock()
        expired = [k for k, entry in self._store.items() if now >= entry.expires_at]
        for k in expired:
            del self._store[k]
        return len(expired)

    def start(self) -> None:
        """Schedule the periodic sweep on the running event loop."""
        if self._destroyed or self._sweeper is not None:
            return
        self._sweeper = asyncio.get_running_loop().create_task(self._sweep_forever())

    async def _sweep_forever(self) -> None:
        while True:
            await asyncio.sleep(self._sweep_interval)
            removed = self.cleanup()
            if removed:
                logger.debug("Cache sweep removed %d expired entries", removed)

    async def stop(self) -> None:
        """Cancel the sweep and wait for it to finish."""
        if self._sweeper is not None:
            self._sweeper.cancel()
            try:
                await self._sweeper
            except asyncio.CancelledError:
                pass
            self._sweeper = None

    def destroy(self) -> None:
        """Stop the sweep for good and drop all entries.

        Synchronous, so the cancelled sweep is not awaited here. Async shutdown
        paths await ``stop()`` first.
        """
        self._destroyed = True
        if self._sweeper is not None:
            self._sweeper.cancel()
            self._sweeper = None
        self.clear()


cache = TTLCache(sweep_interval=settings.cache_sweep_interval)
