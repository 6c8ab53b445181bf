"""Unit tests for the album release pipeline."""

from datetime import date
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from bakeboard.feeds.aggregation.albums import (
    AlbumReleasePipeline,
    credit_names,
    is_library_album,
)
from bakeboard.feeds.aggregation.schemas import AlbumRelease, ArtistInfo
from bakeboard.feeds.extractors.lastfm import LastFMClient
from bakeboard.feeds.extractors.spotify.client import SpotifyAuth
from bakeboard.feeds.extractors.spotify.tokens import SpotifyTokens, SpotifyTokenStore
from bakeboard.feeds.http import FetchClient, SourceAuthError, SourceClientError

TODAY = date(2024, 6, 12)
CAA_URL = "https://coverartarchive.org"


def _release(release_id: str, group_id: str | None, artist: str) -> dict:
    release = {"id": release_id, "title": f"Title {release_id}", "artist-credit": [{"name": artist}]}
    if group_id:
        release["release-group"] = {"id": group_id, "primary-type": "Album"}
    return release


def _musicbrainz(releases: list[dict]) -> MagicMock:
    client = MagicMock()
    client.search_friday_releases = AsyncMock(return_value=releases)
    return client


def _lastfm(listeners: dict[str, int | None]) -> MagicMock:
    async def artist_info(artist: str) -> ArtistInfo:
        return ArtistInfo(listeners=listeners.get(artist))

    client = MagicMock()
    client.get_artist_info = AsyncMock(side_effect=artist_info)
    return client


@pytest.mark.unit
class TestLibraryMatching:
    @staticmethod
    def test_credit_names_split() -> None:
        assert credit_names("Run The Jewels, Zack de la Rocha") == {
            "run the jewels, zack de la rocha",
            "run the jewels",
            "zack de la rocha",
        }

    @staticmethod
    def test_is_library_album() -> None:
        album = AlbumRelease(id="r", title="t", artist="Tyler, The Creator")
        assert is_library_album(album, {"tyler, the creator"})
        assert not is_library_album(album, {"kendrick lamar"})


@pytest.mark.unit
class TestAlbumReleasePipeline:
    @staticmethod
    @pytest.mark.asyncio
    async def test_one_album_per_group_sorted_by_listeners() -> None:
        releases = [
            _release("a1", "RG1", "Artist A"),
            _release("a2", "RG1", "Artist A"),
            _release("b1", "RG2", "Artist B"),
            _release("c1", "RG3", "Artist C"),
            _release("x1", None, "Artist X"),
        ]
        lastfm = _lastfm({"Artist A": 100, "Artist B": 5000})
        pipeline = AlbumReleasePipeline(_musicbrainz(releases), lastfm, CAA_URL)

        albums = await pipeline.fetch_upcoming_friday_albums(TODAY)

        assert [a.id for a in albums] == ["b1", "a1", "c1"]
        assert albums[0].artist_listeners == 5000
        assert albums[2].artist_listeners is None
        assert all(a.friday_date == "2024-06-14" for a in albums)
        pipeline._musicbrainz.search_friday_releases.assert_awaited_once_with(date(2024, 6, 14))

    @staticmethod
    @pytest.mark.asyncio
    async def test_artist_looked_up_once_case_insensitively() -> None:
        releases = [
            _release("1", "RG1", "Wednesday"),
            _release("2", "RG2", "WEDNESDAY"),
            _release("3", "RG3", "wednesday"),
        ]
        lastfm = _lastfm({"Wednesday": 42})
        pipeline = AlbumReleasePipeline(_musicbrainz(releases), lastfm, CAA_URL)

        albums = await pipeline.fetch_upcoming_friday_albums(TODAY)

        lastfm.get_artist_info.assert_awaited_once_with("Wednesday")
        assert {a.artist_listeners for a in albums} == {42}

    @staticmethod
    @pytest.mark.asyncio
    async def test_without_lastfm_all_unknown() -> None:
        releases = [_release("1", "RG1", "Zed"), _release("2", "RG2", "Abe")]
        pipeline = AlbumReleasePipeline(_musicbrainz(releases), None, CAA_URL)

        albums = await pipeline.fetch_upcoming_friday_albums(TODAY)

        assert [a.artist for a in albums] == ["Abe", "Zed"]
        assert all(a.artist_listeners is None for a in albums)

    @staticmethod
    @pytest.mark.asyncio
    async def test_popularity_failure_leaves_album_unknown() -> None:
        async def artist_info(artist: str) -> ArtistInfo:
            if artist == "Broken":
                raise SourceClientError("down", source="lastfm")
            return ArtistInfo(listeners=1, genre="indie")

        lastfm = MagicMock()
        lastfm.get_artist_info = AsyncMock(side_effect=artist_info)
        releases = [_release("1", "RG1", "Broken"), _release("2", "RG2", "Fine")]
        pipeline = AlbumReleasePipeline(_musicbrainz(releases), lastfm, CAA_URL)

        albums = {a.artist: a for a in await pipeline.fetch_upcoming_friday_albums(TODAY)}

        assert albums["Broken"].artist_listeners is None
        assert albums["Fine"].genre == "indie"

    @staticmethod
    @pytest.mark.asyncio
    async def test_library_tagging() -> None:
        auth = MagicMock()
        auth.is_authenticated = MagicMock(return_value=True)
        auth.ensure_valid_token = AsyncMock(return_value="token")
        spotify = MagicMock()
        spotify.fetch_library_artist_names = AsyncMock(return_value={"zack de la rocha"})
        releases = [
            _release("1", "RG1", "Run The Jewels, Zack de la Rocha"),
            _release("2", "RG2", "Someone Else"),
        ]
        pipeline = AlbumReleasePipeline(_musicbrainz(releases), None, CAA_URL, auth, spotify)

        albums = {a.id: a for a in await pipeline.fetch_upcoming_friday_albums(TODAY)}

        assert albums["1"].in_library is True
        assert albums["2"].in_library is False
        spotify.fetch_library_artist_names.assert_awaited_once_with("token")

    @staticmethod
    @pytest.mark.asyncio
    async def test_spotify_failure_tolerated() -> None:
        auth = MagicMock()
        auth.is_authenticated = MagicMock(return_value=True)
        auth.ensure_valid_token = AsyncMock(side_effect=SourceAuthError("expired", source="spotify"))
        pipeline = AlbumReleasePipeline(
            _musicbrainz([_release("1", "RG1", "A")]), None, CAA_URL, auth, MagicMock()
        )

        albums = await pipeline.fetch_upcoming_friday_albums(TODAY)

        assert [a.in_library for a in albums] == [False]

    @staticmethod
    @pytest.mark.asyncio
    async def test_token_store_write_failure_tolerated(tmp_path: Path, clock, mock_http, respond) -> None:
        store = SpotifyTokenStore(tmp_path / "tokens.json")
        store.save(SpotifyTokens(access_token="old", refresh_token="r", expires_at=clock.now - 10))

        def read_only(tokens: SpotifyTokens) -> None:
            raise PermissionError("read-only data dir")

        store.save = read_only
        auth = SpotifyAuth(
            FetchClient("spotify", mock_http(lambda r: respond({"access_token": "new", "expires_in": 3600}))),
            store,
            "client",
            "secret",
            "http://127.0.0.1:5173/api/spotify/callback",
            "https://accounts.spotify.com",
            "user-top-read",
            clock=clock,
        )
        spotify = MagicMock()
        spotify.fetch_library_artist_names = AsyncMock(return_value={"a"})
        pipeline = AlbumReleasePipeline(
            _musicbrainz([_release("1", "RG1", "A")]), None, CAA_URL, auth, spotify
        )

        albums = await pipeline.fetch_upcoming_friday_albums(TODAY)

        assert [(a.id, a.in_library) for a in albums] == [("1", False)]
        spotify.fetch_library_artist_names.assert_not_awaited()

    @staticmethod
    @pytest.mark.asyncio
    async def test_unauthenticated_spotify_skipped() -> None:
        auth = MagicMock()
        auth.is_authenticated = MagicMock(return_value=False)
        auth.ensure_valid_token = AsyncMock()
        pipeline = AlbumReleasePipeline(_musicbrainz([]), None, CAA_URL, auth, MagicMock())

        assert await pipeline.fetch_library_artist_names() == set()
        auth.ensure_valid_token.assert_not_awaited()

    @staticmethod
    @pytest.mark.asyncio
    async def test_search_failure_propagates() -> None:
        musicbrainz = MagicMock()
        musicbrainz.search_friday_releases = AsyncMock(
            side_effect=SourceClientError("503", source="musicbrainz")
        )
        pipeline = AlbumReleasePipeline(musicbrainz, None, CAA_URL)

        with pytest.raises(SourceClientError):
            await pipeline.fetch_upcoming_friday_albums(TODAY)

    @staticmethod
    @pytest.mark.asyncio
    async def test_real_lastfm_client_single_request_per_artist(mock_http, respond) -> None:
        requested: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(request.url.params["artist"])
            return respond({"artist": {"stats": {"listeners": "5"}, "tags": {"tag": []}}})

        lastfm = LastFMClient(
            FetchClient("lastfm", mock_http(handler)), "key", "https://ws.audioscrobbler.com/2.0/"
        )
        releases = [_release("1", "RG1", "Mitski"), _release("2", "RG2", "mitski")]
        pipeline = AlbumReleasePipeline(_musicbrainz(releases), lastfm, CAA_URL)

        albums = await pipeline.fetch_upcoming_friday_albums(TODAY)

        assert requested == ["Mitski"]
        assert [a.artist_listeners for a in albums] == [5, 5]
