"""Outbound HTTP building blocks: limiter, cache, tolerant join, client."""

from bakeboard.feeds.http.cache import CacheEntry, TTLCache
from bakeboard.feeds.http.client import (
    FetchClient,
    SourceAuthError,
    SourceClientError,
    SourceHTTPError,
    SourceTimeoutError,
)
from bakeboard.feeds.http.gather import (
    Failure,
    Result,
    Success,
    join_all_tolerant,
    map_tolerant,
    successes,
    value_or,
)
from bakeboard.feeds.http.limiter import SlidingWindowRateLimiter

__all__ = [
    "SlidingWindowRateLimiter",
    "TTLCache",
    "CacheEntry",
    "FetchClient",
    "SourceClientError",
    "SourceHTTPError",
    "SourceTimeoutError",
    "SourceAuthError",
    "Success",
    "Failure",
    "Result",
    "join_all_tolerant",
    "map_tolerant",
    "successes",
    "value_or",
]
