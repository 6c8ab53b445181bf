"""Last.fm web service client with rate limiting and artist cache.

Last.fm allows roughly five requests per second per key; the fetch client
handed in carries a sliding-window limiter sized for that. Artist lookups
are cached for the lifetime of the process, failures included.
"""

import logging
from typing import Any

from bakeboard.feeds.aggregation.schemas import ArtistInfo, ChartAlbum, ChartArtist, ChartTrack
from bakeboard.feeds.extractors.lastfm.normalizer import (
    parse_artist_info,
    parse_tag_albums,
    parse_top_artists,
    parse_top_tracks,
)
from bakeboard.feeds.http import FetchClient, SourceClientError, TTLCache

logger = logging.getLogger(__name__)


class LastFMClientError(SourceClientError):
    """Raised when Last.fm answers with an error object."""

    pass


class LastFMClient:
    """HTTP client for the Last.fm 2.0 API."""

    def __init__(
        self,
        fetcher: FetchClient,
        api_key: str,
        base_url: str,
        artist_cache: TTLCache[ArtistInfo] | None = None,
        *,
        item_timeout: float = 5.0,
        list_timeout: float = 8.0,
    ) -> None:
        """Initialize Last.fm client.

        Args:
            fetcher: Rate-limited fetch client for Last.fm.
            api_key: Last.fm API key.
            base_url: Web service endpoint.
            artist_cache: Cache of artist lookups (process lifetime by default).
            item_timeout: Deadline for artist lookups.
            list_timeout: Deadline for chart calls.
        """
        self._fetcher = fetcher
        self._api_key = api_key
        self._base_url = base_url
        self._artist_cache = artist_cache or TTLCache(None, name="lastfm.artists")
        self._item_timeout = item_timeout
        self._list_timeout = list_timeout

    @property
    def artist_cache(self) -> TTLCache[ArtistInfo]:
        """Cache of artist lookups."""
        return self._artist_cache

    async def _call(self, method: str, timeout: float, **params: Any) -> dict[str, Any]:
        """Call a web service method.

        Raises:
            LastFMClientError: On a Last.fm error object.
            SourceClientError: On transport or HTTP errors.
        """
        payload = await self._fetcher.get_json(
            self._base_url,
            params={"method": method, "api_key": self._api_key, "format": "json", **params},
            timeout=timeout,
        )
        if not isinstance(payload, dict):
            raise LastFMClientError(f"Unexpected Last.fm payload: {method}", source="lastfm")
        if "error" in payload:
            msg = f"Last.fm error {payload['error']} on {method}: {payload.get('message', '')}"
            raise LastFMClientError(msg, source="lastfm")
        return payload

    # -------------------------------------------------------------------------
    # Artist popularity
    # -------------------------------------------------------------------------

    async def get_artist_info(self, artist: str) -> ArtistInfo:
        """Listener count and top tag of an artist, cached by lowercased name.

        Any failure is cached as an empty ArtistInfo so it is not retried
        for the lifetime of the cache.
        """
        return await self._artist_cache.get_or_load(artist, lambda: self._load_artist(artist))

    async def _load_artist(self, artist: str) -> ArtistInfo:
        try:
            payload = await self._call("artist.getinfo", self._item_timeout, artist=artist)
        except SourceClientError as e:
            logger.warning(f"Artist lookup failed for '{artist}': {e}")
            return ArtistInfo()
        return parse_artist_info(payload)

    # -------------------------------------------------------------------------
    # Charts
    # -------------------------------------------------------------------------

    async def get_top_tracks(self, limit: int = 50) -> list[ChartTrack]:
        """Global top tracks."""
        payload = await self._call("chart.gettoptracks", self._list_timeout, limit=limit)
        return parse_top_tracks(payload)

    async def get_top_artists(self, limit: int = 50) -> list[ChartArtist]:
        """Global top artists."""
        payload = await self._call("chart.gettopartists", self._list_timeout, limit=limit)
        return parse_top_artists(payload)

    async def get_tag_top_albums(self, tag: str, limit: int = 50) -> list[ChartAlbum]:
        """Top albums for a genre tag."""
        payload = await self._call("tag.gettopalbums", self._list_timeout, tag=tag, limit=limit)
        return parse_tag_albums(tag, payload)
