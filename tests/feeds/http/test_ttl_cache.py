"""Unit tests for the TTL cache."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from bakeboard.feeds.http.cache import TTLCache


@pytest.mark.unit
class TestTTLCacheBasics:
    @staticmethod
    def test_normalize_key() -> None:
        assert TTLCache.normalize_key("  Foo   Fighters ") == "foo fighters"

    @staticmethod
    def test_set_and_get(clock) -> None:
        cache: TTLCache[int] = TTLCache(10.0, clock=clock)
        cache.set("Key", 42)

        entry = cache.get("key")
        assert entry is not None
        assert entry.value == 42
        assert entry.fetched_at == clock.now

    @staticmethod
    def test_entry_expires(clock) -> None:
        cache: TTLCache[int] = TTLCache(10.0, clock=clock)
        cache.set("key", 1)
        clock.advance(10.0)

        assert cache.get("key") is None
        assert "key" not in cache

    @staticmethod
    def test_no_ttl_keeps_entries(clock) -> None:
        cache: TTLCache[int] = TTLCache(None, clock=clock)
        cache.set("key", 1)
        clock.advance(1e9)

        assert "key" in cache
        assert len(cache) == 1


@pytest.mark.unit
class TestTTLCacheGetOrLoad:
    @staticmethod
    @pytest.mark.asyncio
    async def test_loads_once_per_key(clock) -> None:
        cache: TTLCache[str] = TTLCache(60.0, clock=clock)
        loader = AsyncMock(return_value="value")

        first = await cache.get_or_load("Radiohead", loader)
        second = await cache.get_or_load("radiohead", loader)

        assert first == second == "value"
        loader.assert_awaited_once()

    @staticmethod
    @pytest.mark.asyncio
    async def test_reloads_after_ttl(clock) -> None:
        cache: TTLCache[int] = TTLCache(600.0, clock=clock)
        loader = AsyncMock(side_effect=[1, 2])

        assert await cache.get_or_load("charts", loader) == 1
        clock.advance(599.0)
        assert await cache.get_or_load("charts", loader) == 1
        clock.advance(1.0)
        assert await cache.get_or_load("charts", loader) == 2
        assert loader.await_count == 2

    @staticmethod
    @pytest.mark.asyncio
    async def test_failed_load_is_not_stored(clock) -> None:
        cache: TTLCache[int] = TTLCache(60.0, clock=clock)
        loader = AsyncMock(side_effect=[RuntimeError("down"), 7])

        with pytest.raises(RuntimeError):
            await cache.get_or_load("key", loader)

        assert "key" not in cache
        assert await cache.get_or_load("key", loader) == 7

    @staticmethod
    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_load() -> None:
        cache: TTLCache[str] = TTLCache(None)
        release = asyncio.Event()
        calls = 0

        async def loader() -> str:
            nonlocal calls
            calls += 1
            await release.wait()
            return "shared"

        tasks = [asyncio.create_task(cache.get_or_load("Artist", loader)) for _ in range(3)]
        await asyncio.sleep(0)
        release.set()
        results = await asyncio.gather(*tasks)

        assert results == ["shared", "shared", "shared"]
        assert calls == 1
