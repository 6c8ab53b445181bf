"""Unit tests for the MusicBrainz extractor."""

from datetime import date

import httpx
import pytest

from bakeboard.feeds.extractors.musicbrainz.client import MusicBrainzClient, build_friday_query
from bakeboard.feeds.extractors.musicbrainz.normalizer import (
    artist_credit_name,
    cover_url,
    normalize_release,
    release_group_id,
)
from bakeboard.feeds.http import FetchClient, SourceClientError

CAA_URL = "https://coverartarchive.org"


@pytest.mark.unit
class TestNormalizer:
    @staticmethod
    def test_build_friday_query() -> None:
        query = build_friday_query(date(2024, 6, 14))
        assert query == (
            "date:2024-06-14 AND (primarytype:Album OR primarytype:EP) AND status:Official"
        )

    @staticmethod
    def test_artist_credit_joined() -> None:
        release = {"artist-credit": [{"name": "Run The Jewels"}, {"name": "Zack de la Rocha"}]}
        assert artist_credit_name(release) == "Run The Jewels, Zack de la Rocha"

    @staticmethod
    def test_missing_artist_credit() -> None:
        assert artist_credit_name({}) == "Unknown Artist"
        assert artist_credit_name({"artist-credit": [{}]}) == "Unknown Artist"

    @staticmethod
    def test_cover_url_by_group_or_release() -> None:
        assert cover_url(CAA_URL, {"id": "r1", "release-group": {"id": "rg1"}}) == (
            "https://coverartarchive.org/release-group/rg1/front-500"
        )
        assert cover_url(CAA_URL, {"id": "r1"}) == (
            "https://coverartarchive.org/release/r1/front-500"
        )

    @staticmethod
    def test_normalize_release_defaults() -> None:
        album = normalize_release({"id": "r1", "title": "LP"}, "2024-06-14", CAA_URL)

        assert album.artist == "Unknown Artist"
        assert album.type == "Album"
        assert album.release_date == "2024-06-14"
        assert album.friday_date == "2024-06-14"
        assert release_group_id({"id": "r1"}) is None

    @staticmethod
    def test_normalize_release_group_type() -> None:
        album = normalize_release(
            {"id": "r2", "title": "Short", "date": "2024-06-14",
             "release-group": {"id": "rg2", "primary-type": "EP"}},
            "2024-06-14",
            CAA_URL,
        )
        assert album.type == "EP"


@pytest.mark.unit
class TestMusicBrainzClient:
    @staticmethod
    @pytest.mark.asyncio
    async def test_search_friday_releases(mock_http, respond) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return respond({"releases": [{"id": "r1"}]})

        client = MusicBrainzClient(
            FetchClient("musicbrainz", mock_http(handler)),
            "https://musicbrainz.org/ws/2",
        )
        releases = await client.search_friday_releases(date(2024, 6, 14))

        assert releases == [{"id": "r1"}]
        assert seen[0].url.path == "/ws/2/release"
        assert seen[0].url.params["fmt"] == "json"
        assert seen[0].url.params["limit"] == "100"
        assert seen[0].url.params["query"].startswith("date:2024-06-14")

    @staticmethod
    @pytest.mark.asyncio
    async def test_missing_releases_key(mock_http, respond) -> None:
        client = MusicBrainzClient(
            FetchClient("musicbrainz", mock_http(lambda r: respond({"count": 0}))),
            "https://musicbrainz.org/ws/2",
        )
        assert await client.search_releases("x") == []

    @staticmethod
    @pytest.mark.asyncio
    async def test_search_failure_raises(mock_http, respond) -> None:
        client = MusicBrainzClient(
            FetchClient("musicbrainz", mock_http(lambda r: respond({}, 503))),
            "https://musicbrainz.org/ws/2",
        )
        with pytest.raises(SourceClientError):
            await client.search_releases("x")
