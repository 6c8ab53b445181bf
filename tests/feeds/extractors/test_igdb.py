"""Unit tests for the IGDB extractor."""

import httpx
import pytest

from bakeboard.feeds.extractors.igdb import IGDBClient, TwitchTokenProvider, normalize_game
from bakeboard.feeds.extractors.igdb.normalizer import cover_url, steam_app_id, website_url
from bakeboard.feeds.http import FetchClient, SourceAuthError, SourceClientError

TOKEN_URL = "https://id.twitch.tv/oauth2/token"
IGDB_URL = "https://api.igdb.com/v4"


@pytest.mark.unit
class TestNormalizer:
    @staticmethod
    def test_cover_url_upgraded() -> None:
        raw = {"url": "//images.igdb.com/igdb/image/upload/t_thumb/co1.jpg"}
        assert cover_url(raw) == "//images.igdb.com/igdb/image/upload/t_cover_big/co1.jpg"
        assert cover_url(None) is None

    @staticmethod
    def test_steam_app_id_from_external_games() -> None:
        externals = [{"category": 5, "uid": "gog"}, {"category": 1, "uid": 1091500}]
        assert steam_app_id(externals) == "1091500"
        assert steam_app_id([]) is None

    @staticmethod
    def test_website_prefers_official() -> None:
        sites = [
            {"url": "https://wiki.example", "category": 3},
            {"url": "https://game.example", "category": 1},
        ]
        assert website_url(sites) == "https://game.example"
        assert website_url(sites[:1]) == "https://wiki.example"
        assert website_url(None) is None

    @staticmethod
    def test_normalize_game() -> None:
        game = normalize_game(
            {
                "id": 42,
                "name": "Hollow Lantern",
                "cover": {"url": "//images.igdb.com/t_thumb/c.jpg"},
                "platforms": [{"name": "PC (Microsoft Windows)"}, {"name": "PlayStation 5"}],
                "external_games": [{"category": 1, "uid": "730"}],
                "first_release_date": 1718150400,
                "hypes": 12,
                "follows": 30,
            }
        )

        assert game.id == 42
        assert game.cover_url == "https://images.igdb.com/t_cover_big/c.jpg"
        assert game.platforms == ["PC (Microsoft Windows)", "PlayStation 5"]
        assert game.steam_app_id == "730"
        assert game.release_date == "2024-06-12"
        assert game.popularity == 42

    @staticmethod
    def test_normalize_sparse_game() -> None:
        game = normalize_game({"id": 1})

        assert game.name == ""
        assert game.cover_url is None
        assert game.platforms == []
        assert game.hypes == 0


@pytest.mark.unit
class TestTwitchTokenProvider:
    @staticmethod
    @pytest.mark.asyncio
    async def test_token_cached_until_margin(mock_http, respond, clock) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return respond({"access_token": f"tok{calls}", "expires_in": 3600})

        fetcher = FetchClient("twitch", mock_http(handler))
        tokens = TwitchTokenProvider(fetcher, "cid", "secret", TOKEN_URL, clock=clock)

        assert await tokens.get_token() == "tok1"
        clock.advance(3000)
        assert await tokens.get_token() == "tok1"
        clock.advance(541)
        assert await tokens.get_token() == "tok2"
        assert calls == 2

    @staticmethod
    @pytest.mark.asyncio
    async def test_refused_credentials_raise_auth_error(mock_http, respond) -> None:
        fetcher = FetchClient("twitch", mock_http(lambda r: respond({"message": "invalid"}, 400)))
        tokens = TwitchTokenProvider(fetcher, "cid", "bad", TOKEN_URL)

        with pytest.raises(SourceAuthError, match="Twitch OAuth failed"):
            await tokens.get_token()

    @staticmethod
    @pytest.mark.asyncio
    async def test_missing_token_raises_auth_error(mock_http, respond) -> None:
        fetcher = FetchClient("twitch", mock_http(lambda r: respond({"expires_in": 10})))
        tokens = TwitchTokenProvider(fetcher, "cid", "secret", TOKEN_URL)

        with pytest.raises(SourceAuthError, match="no access token"):
            await tokens.get_token()


@pytest.mark.unit
class TestIGDBClient:
    @staticmethod
    def test_build_release_query() -> None:
        query = IGDBClient.build_release_query(100, 200, 50)

        assert query.startswith("fields name,cover.url,")
        assert "where first_release_date >= 100 & first_release_date < 200;" in query
        assert query.endswith("limit 50;")

    @staticmethod
    @pytest.mark.asyncio
    async def test_fetch_releases_sends_auth_headers(mock_http, respond) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if request.url.host == "id.twitch.tv":
                return respond({"access_token": "abc", "expires_in": 3600})
            return respond([{"id": 1, "name": "Game"}])

        http = mock_http(handler)
        tokens = TwitchTokenProvider(FetchClient("twitch", http), "cid", "secret", TOKEN_URL)
        client = IGDBClient(FetchClient("igdb", http), tokens, IGDB_URL, release_limit=10)

        games = await client.fetch_releases_between(100, 200)

        assert games == [{"id": 1, "name": "Game"}]
        igdb_request = seen[-1]
        assert igdb_request.url.path == "/v4/games"
        assert igdb_request.headers["Client-ID"] == "cid"
        assert igdb_request.headers["Authorization"] == "Bearer abc"
        assert igdb_request.content.endswith(b"limit 10;")

    @staticmethod
    @pytest.mark.asyncio
    async def test_unexpected_payload_raises(mock_http, respond) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "id.twitch.tv":
                return respond({"access_token": "abc", "expires_in": 3600})
            return respond({"message": "oops"})

        http = mock_http(handler)
        tokens = TwitchTokenProvider(FetchClient("twitch", http), "cid", "secret", TOKEN_URL)
        client = IGDBClient(FetchClient("igdb", http), tokens, IGDB_URL)

        with pytest.raises(SourceClientError):
            await client.fetch_releases_between(100, 200)
