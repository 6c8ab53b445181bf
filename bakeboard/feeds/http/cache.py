"""In-memory TTL cache keyed by normalized query strings."""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class CacheEntry(Generic[T]):
    """Cached value with its write time.

    Attributes:
        value: Cached payload.
        fetched_at: Clock reading when the value was stored.
    """

    value: T
    fetched_at: float


class TTLCache(Generic[T]):
    """Cache whose entries expire a fixed duration after their write.

    There is no explicit invalidation: entries are overwritten on refresh
    or ignored once older than the TTL. A TTL of None keeps entries until
    the process exits.

    Concurrent `get_or_load` calls for the same key share a single load.
    """

    def __init__(
        self,
        ttl_seconds: float | None,
        *,
        name: str = "cache",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize an empty cache.

        Args:
            ttl_seconds: Entry lifetime, None for process lifetime.
            name: Cache name for log messages.
            clock: Monotonic clock, injectable for tests.
        """
        self.name = name
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry[T]] = {}
        self._pending: dict[str, asyncio.Future[T]] = {}

    @staticmethod
    def normalize_key(key: str) -> str:
        """Normalize a query string into a cache key."""
        return " ".join(key.split()).casefold()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def get(self, key: str) -> CacheEntry[T] | None:
        """Return the entry for `key` if it is still fresh."""
        entry = self._entries.get(self.normalize_key(key))
        if entry is None:
            return None
        if self.ttl_seconds is not None and self._clock() - entry.fetched_at >= self.ttl_seconds:
            return None
        return entry

    def set(self, key: str, value: T) -> CacheEntry[T]:
        """Store `value` under `key` with the current time."""
        entry = CacheEntry(value=value, fetched_at=self._clock())
        self._entries[self.normalize_key(key)] = entry
        return entry

    async def get_or_load(self, key: str, loader: Callable[[], Awaitable[T]]) -> T:
        """Return a fresh cached value or load, store and return a new one.

        Args:
            key: Query string identifying the value.
            loader: Coroutine factory invoked on a miss.

        Returns:
            Cached or freshly loaded value. Loader exceptions propagate and
            nothing is stored.
        """
        normalized = self.normalize_key(key)
        entry = self.get(normalized)
        if entry is not None:
            logger.debug(f"Cache hit ({self.name}): {normalized}")
            return entry.value

        pending = self._pending.get(normalized)
        if pending is None:
            pending = asyncio.ensure_future(self._load(normalized, loader))
            self._pending[normalized] = pending
            pending.add_done_callback(lambda _: self._pending.pop(normalized, None))

        return await asyncio.shield(pending)

    async def _load(self, key: str, loader: Callable[[], Awaitable[T]]) -> T:
        value = await loader()
        self.set(key, value)
        return value
