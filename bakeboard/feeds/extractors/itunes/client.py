"""iTunes Search API client: album artwork, release dates, song previews.

Used only for best-effort backfill; every method resolves failures to None.
"""

import logging
import re
from dataclasses import dataclass

from bakeboard.feeds.aggregation.schemas import ArtistPreview
from bakeboard.feeds.http import FetchClient

logger = logging.getLogger(__name__)

_ARTWORK_SIZE_PATTERN = re.compile(r"/\d+x\d+bb\.")


@dataclass(frozen=True)
class ITunesAlbumMatch:
    """Artwork and release date of an iTunes album hit.

    Attributes:
        collection_name: Album name on iTunes.
        artist_name: Artist name on iTunes.
        artwork_url: Resized artwork URL.
        release_date: ISO date, None when iTunes omits it.
    """

    collection_name: str
    artist_name: str
    artwork_url: str | None
    release_date: str | None


class ITunesClient:
    """HTTP client for the iTunes Search API."""

    def __init__(self, fetcher: FetchClient, search_url: str, artwork_size: int = 600) -> None:
        self._fetcher = fetcher
        self._search_url = search_url
        self._artwork_size = artwork_size

    def resize_artwork(self, url: str | None) -> str | None:
        """Ask the CDN for larger artwork than the 100px default."""
        if not url:
            return None
        size = self._artwork_size
        return _ARTWORK_SIZE_PATTERN.sub(f"/{size}x{size}bb.", url)

    async def search_album(self, term: str) -> ITunesAlbumMatch | None:
        """Return the first album hit for a search term."""
        payload = await self._fetcher.try_get_json(
            self._search_url,
            params={"term": term, "entity": "album", "limit": 5},
        )
        results = (payload or {}).get("results") or []
        if not results:
            return None

        hit = results[0]
        release_date = hit.get("releaseDate")
        return ITunesAlbumMatch(
            collection_name=hit.get("collectionName") or "",
            artist_name=hit.get("artistName") or "",
            artwork_url=self.resize_artwork(hit.get("artworkUrl100")),
            release_date=release_date[:10] if release_date else None,
        )

    async def fetch_artist_top_preview(self, artist: str) -> ArtistPreview | None:
        """First song preview by an artist.

        Prefers a result whose artist name matches case-insensitively,
        else the first result carrying a preview.
        """
        payload = await self._fetcher.try_get_json(
            self._search_url,
            params={"term": artist, "entity": "song", "limit": 10, "attribute": "artistTerm"},
        )
        tracks = [t for t in (payload or {}).get("results") or [] if t.get("previewUrl")]
        if not tracks:
            return None

        wanted = artist.lower()
        track = next(
            (t for t in tracks if str(t.get("artistName", "")).lower() == wanted),
            tracks[0],
        )
        return ArtistPreview(track_name=track.get("trackName") or "", preview_url=track["previewUrl"])
