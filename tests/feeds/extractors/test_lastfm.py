"""Unit tests for the Last.fm extractor."""

import httpx
import pytest

from bakeboard.feeds.extractors.lastfm.client import LastFMClient, LastFMClientError
from bakeboard.feeds.extractors.lastfm.normalizer import (
    is_placeholder_image,
    parse_artist_info,
    parse_count,
    parse_tag_albums,
    pick_image,
)
from bakeboard.feeds.http import FetchClient

API_URL = "https://ws.audioscrobbler.com/2.0/"
PLACEHOLDER = "https://lastfm.freetls.fastly.net/i/u/300x300/2a96cbd8b46e442fc41c2b86b821562f.png"


def _client(http: httpx.AsyncClient) -> LastFMClient:
    return LastFMClient(FetchClient("lastfm", http), "key", API_URL)


@pytest.mark.unit
class TestNormalizer:
    @staticmethod
    def test_parse_count() -> None:
        assert parse_count("1234") == 1234
        assert parse_count(56) == 56
        assert parse_count("") is None
        assert parse_count(None) is None
        assert parse_count("n/a") is None

    @staticmethod
    def test_placeholder_detection() -> None:
        assert is_placeholder_image(PLACEHOLDER) is True
        assert is_placeholder_image("") is True
        assert is_placeholder_image("https://img.example/a.png") is False

    @staticmethod
    def test_pick_image_skips_placeholder() -> None:
        images = [
            {"size": "small", "#text": "https://img.example/small.png"},
            {"size": "extralarge", "#text": PLACEHOLDER},
            {"size": "large", "#text": "https://img.example/large.png"},
        ]
        assert pick_image(images) == "https://img.example/large.png"
        assert pick_image([{"size": "mega", "#text": PLACEHOLDER}]) is None

    @staticmethod
    def test_parse_artist_info_single_tag_object() -> None:
        payload = {
            "artist": {
                "stats": {"listeners": "2500000"},
                "tags": {"tag": {"name": "shoegaze"}},
            }
        }
        info = parse_artist_info(payload)

        assert info.listeners == 2500000
        assert info.genre == "shoegaze"
        assert info.is_known is True

    @staticmethod
    def test_parse_artist_info_empty() -> None:
        assert parse_artist_info({}).is_known is False

    @staticmethod
    def test_parse_tag_albums_ranks_in_order() -> None:
        payload = {
            "albums": {
                "album": [
                    {"name": "First", "artist": {"name": "A"}},
                    {"name": ""},
                    {"name": "Second", "artist": {"name": "B"}},
                ]
            }
        }
        albums = parse_tag_albums("rock", payload)

        assert [(a.name, a.rank, a.genre) for a in albums] == [
            ("First", 1, "rock"),
            ("Second", 2, "rock"),
        ]


@pytest.mark.unit
class TestLastFMClient:
    @staticmethod
    @pytest.mark.asyncio
    async def test_artist_info_requested_once(mock_http, respond) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return respond({"artist": {"stats": {"listeners": "10"}}})

        client = _client(mock_http(handler))

        first = await client.get_artist_info("Radiohead")
        second = await client.get_artist_info("radiohead ")

        assert first.listeners == second.listeners == 10
        assert len(seen) == 1
        assert seen[0].url.params["method"] == "artist.getinfo"
        assert seen[0].url.params["artist"] == "Radiohead"
        assert seen[0].url.params["format"] == "json"

    @staticmethod
    @pytest.mark.asyncio
    async def test_failed_artist_lookup_cached_as_unknown(mock_http, respond) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return respond({"error": 6, "message": "The artist you supplied could not be found"})

        client = _client(mock_http(handler))

        assert (await client.get_artist_info("Nobody")).is_known is False
        assert (await client.get_artist_info("Nobody")).is_known is False
        assert calls == 1

    @staticmethod
    @pytest.mark.asyncio
    async def test_chart_error_payload_raises(mock_http, respond) -> None:
        client = _client(mock_http(lambda r: respond({"error": 29, "message": "Rate limit"})))

        with pytest.raises(LastFMClientError, match="Rate limit"):
            await client.get_top_tracks()

    @staticmethod
    @pytest.mark.asyncio
    async def test_get_top_tracks(mock_http, respond) -> None:
        payload = {
            "tracks": {
                "track": [
                    {"name": "Song", "artist": {"name": "Band"}, "listeners": "99", "image": []}
                ]
            }
        }
        client = _client(mock_http(lambda r: respond(payload)))

        tracks = await client.get_top_tracks(limit=1)

        assert len(tracks) == 1
        assert tracks[0].artist == "Band"
        assert tracks[0].listeners == 99
        assert tracks[0].image_url is None
