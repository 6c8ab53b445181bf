"""Sliding-window rate limiter for outbound API calls.

One instance per upstream source, created once and shared by every
request to that source for the lifetime of the process.
"""

import asyncio
import logging
import time
from collections import deque
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class SlidingWindowRateLimiter:
    """At most `max_requests` per rolling `period_seconds` window.

    Keeps the timestamps of recent requests. When the window is full the
    caller sleeps until the oldest timestamp leaves it. An optional minimum
    interval spaces consecutive requests (MusicBrainz asks for one second).

    The gate is serialized with an asyncio.Lock so concurrent callers are
    admitted one at a time; the network call that follows is not.

    Attributes:
        name: Source name used in log messages.
        max_requests: Window capacity.
        period_seconds: Window length in seconds.
        min_interval: Minimum spacing between two requests in seconds.
    """

    def __init__(
        self,
        max_requests: int,
        period_seconds: float,
        min_interval: float = 0.0,
        *,
        name: str = "upstream",
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize an empty window.

        Args:
            max_requests: Window capacity (must be positive).
            period_seconds: Window length in seconds (must be positive).
            min_interval: Minimum spacing between requests.
            name: Source name for logs.
            clock: Monotonic clock, injectable for tests.
            sleep: Async sleep, injectable for tests.
        """
        if max_requests < 1:
            raise ValueError("max_requests must be >= 1")
        if period_seconds <= 0:
            raise ValueError("period_seconds must be > 0")

        self.name = name
        self.max_requests = max_requests
        self.period_seconds = period_seconds
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._timestamps: deque[float] = deque()
        self._lock = asyncio.Lock()

    @property
    def in_window(self) -> int:
        """Number of requests recorded in the current window."""
        self._evict(self._clock())
        return len(self._timestamps)

    async def acquire(self) -> None:
        """Wait for a free slot, then record the request."""
        async with self._lock:
            now = self._clock()
            self._evict(now)

            # Timers may fire early, so re-check the window after each wait
            while len(self._timestamps) >= self.max_requests:
                wait_time = self._timestamps[0] + self.period_seconds - now
                logger.debug(f"Rate limit ({self.name}): waiting {wait_time:.2f}s")
                await self._sleep(max(wait_time, 0.0))
                now = self._clock()
                self._evict(now)

            # Enforce minimum delay between requests
            if self.min_interval and self._timestamps:
                elapsed = now - self._timestamps[-1]
                if elapsed < self.min_interval:
                    await self._sleep(self.min_interval - elapsed)
                    now = self._clock()

            self._timestamps.append(now)

    def _evict(self, now: float) -> None:
        """Drop timestamps that left the window."""
        cutoff = now - self.period_seconds
        while self._timestamps and self._timestamps[0] <= cutoff:
            self._timestamps.popleft()
