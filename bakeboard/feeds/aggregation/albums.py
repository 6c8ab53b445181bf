"""Album release pipeline: MusicBrainz releases ranked by Last.fm popularity.

Steps:
    1. MusicBrainz search for official albums and EPs dated on the release Friday
    2. One release per release group
    3. Last.fm listeners and top tag per unique artist (rate limited, cached)
    4. Spotify library tagging when the user has connected an account
    5. Sort: known listener counts first, then by artist
"""

from collections.abc import Iterable
from datetime import date

from bakeboard.feeds.aggregation.deduplicator import (
    DeduplicationStats,
    deduplicate_release_groups,
)
from bakeboard.feeds.aggregation.ordering import sort_albums
from bakeboard.feeds.aggregation.schemas import AlbumRelease, ArtistInfo
from bakeboard.feeds.aggregation.stats import EnrichmentStats
from bakeboard.feeds.extractors.lastfm import LastFMClient
from bakeboard.feeds.extractors.musicbrainz import MusicBrainzClient, normalize_release
from bakeboard.feeds.extractors.spotify import SpotifyAuth, SpotifyClient
from bakeboard.feeds.http import map_tolerant
from bakeboard.feeds.utils import release_friday, setup_logger

CREDIT_SEPARATOR = ", "


def credit_names(artist: str) -> set[str]:
    """Lowercased names in a comma-separated artist credit, whole credit included."""
    lowered = artist.lower()
    return {lowered, *(part.strip() for part in lowered.split(CREDIT_SEPARATOR) if part.strip())}


def is_library_album(album: AlbumRelease, library: set[str]) -> bool:
    """True when any credited artist is in the user's listening library."""
    return not library.isdisjoint(credit_names(album.artist))


class AlbumReleasePipeline:
    """Upcoming Friday album releases with popularity enrichment."""

    def __init__(
        self,
        musicbrainz: MusicBrainzClient,
        lastfm: LastFMClient | None,
        cover_art_url: str,
        spotify_auth: SpotifyAuth | None = None,
        spotify: SpotifyClient | None = None,
    ) -> None:
        """Initialize pipeline.

        Args:
            musicbrainz: MusicBrainz client (primary source).
            lastfm: Last.fm client, None when no API key is configured.
            cover_art_url: Cover Art Archive base URL.
            spotify_auth: Spotify OAuth helper, None when not configured.
            spotify: Spotify library client, None when not configured.
        """
        self.logger = setup_logger("feeds.albums")
        self._musicbrainz = musicbrainz
        self._lastfm = lastfm
        self._cover_art_url = cover_art_url
        self._spotify_auth = spotify_auth
        self._spotify = spotify

    async def fetch_upcoming_friday_albums(self, today: date | None = None) -> list[AlbumRelease]:
        """Fetch, enrich and sort the release Friday's albums.

        Args:
            today: Reference day (defaults to today).

        Returns:
            Sorted albums, one per release group.

        Raises:
            SourceClientError: When the MusicBrainz search fails.
        """
        friday = release_friday(today or date.today())
        releases = await self._musicbrainz.search_friday_releases(friday)

        dedup_stats = DeduplicationStats()
        unique = deduplicate_release_groups(releases, dedup_stats)
        dedup_stats.log_summary("releases")

        albums = [normalize_release(r, friday.isoformat(), self._cover_art_url) for r in unique]
        if not albums:
            return []

        stats = EnrichmentStats(feed="albums", total_items=len(albums))
        popularity = await self.fetch_all_artist_popularity(albums)
        stats.record(
            "popularity",
            len({a.artist.lower() for a in albums}) if self._lastfm else 0,
            sum(1 for info in popularity.values() if info.is_known),
        )
        albums = self.annotate_popularity(albums, popularity)

        library = await self.fetch_library_artist_names()
        if library:
            albums = [
                a.model_copy(update={"in_library": True}) if is_library_album(a, library) else a
                for a in albums
            ]
            stats.record("library", len(albums), sum(1 for a in albums if a.in_library))

        stats.log_summary()
        return sort_albums(albums)

    # -------------------------------------------------------------------------
    # Popularity
    # -------------------------------------------------------------------------

    async def fetch_all_artist_popularity(
        self,
        albums: Iterable[AlbumRelease],
    ) -> dict[str, ArtistInfo]:
        """Last.fm info per unique artist, keyed by lowercased artist credit.

        Args:
            albums: Albums whose artists to look up.

        Returns:
            Mapping of lowercased artist to info; empty without Last.fm.
        """
        if self._lastfm is None:
            return {}

        artists: dict[str, str] = {}
        for album in albums:
            artists.setdefault(album.artist.lower(), album.artist)

        lastfm = self._lastfm
        return await map_tolerant(artists, lambda key: lastfm.get_artist_info(artists[key]))

    @staticmethod
    def annotate_popularity(
        albums: Iterable[AlbumRelease],
        popularity: dict[str, ArtistInfo],
    ) -> list[AlbumRelease]:
        """Copy listeners and genre onto albums (unknown stays None)."""
        annotated = []
        for album in albums:
            info = popularity.get(album.artist.lower())
            if info is None:
                annotated.append(album)
                continue
            annotated.append(
                album.model_copy(update={"artist_listeners": info.listeners, "genre": info.genre})
            )
        return annotated

    # -------------------------------------------------------------------------
    # Spotify library
    # -------------------------------------------------------------------------

    async def fetch_library_artist_names(self) -> set[str]:
        """Lowercased artist names the user listens to, empty on any failure."""
        if self._spotify_auth is None or self._spotify is None:
            return set()
        if not self._spotify_auth.is_authenticated():
            return set()

        try:
            token = await self._spotify_auth.ensure_valid_token()
            return await self._spotify.fetch_library_artist_names(token)
        except Exception as e:  # tagging never fails the feed
            self.logger.warning(f"Spotify library unavailable: {e}")
            return set()
