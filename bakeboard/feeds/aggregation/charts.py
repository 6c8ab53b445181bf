"""Top charts aggregate: Last.fm charts with a genre-diversified album list.

The whole payload is cached for ten minutes. Top tracks and top artists
are required; genre album lists and iTunes artwork backfill are
best-effort.
"""

import re
from collections.abc import Sequence
from datetime import UTC, datetime

from bakeboard.feeds.aggregation.schemas import ChartAlbum, TopChartsResponse, absolute_url_or_none
from bakeboard.feeds.aggregation.stats import EnrichmentStats
from bakeboard.feeds.extractors.itunes import ITunesClient
from bakeboard.feeds.extractors.lastfm import LastFMClient
from bakeboard.feeds.http import Failure, TTLCache, join_all_tolerant, successes, value_or
from bakeboard.feeds.utils import setup_logger
from bakeboard.settings.sources.lastfm import CHART_GENRES, CHARTS_TTL_SECONDS, TOP_ALBUMS_COUNT

CHARTS_CACHE_KEY = "top-charts"

_PARENTHETICAL_SUFFIX = re.compile(r"(\s*[\(\[][^()\[\]]*[\)\]])+\s*$")


def strip_parenthetical(name: str) -> str:
    """Drop trailing "(Deluxe Edition)"-style suffixes."""
    return _PARENTHETICAL_SUFFIX.sub("", name).strip()


def album_query_variants(album: ChartAlbum) -> list[str]:
    """Search terms tried in order: artist + album, album, album without suffix."""
    variants = [f"{album.artist} {album.name}".strip(), album.name, strip_parenthetical(album.name)]
    return [v for v in dict.fromkeys(variants) if v]


def round_robin_albums(genre_lists: Sequence[Sequence[ChartAlbum]], count: int) -> list[ChartAlbum]:
    """Take one album per genre per rank until `count` unique albums.

    Albums already taken under another genre (same name and artist,
    case-insensitive) are skipped.

    Args:
        genre_lists: Ranked albums per genre, in genre order.
        count: Number of albums wanted.

    Returns:
        Up to `count` albums.
    """
    picked: list[ChartAlbum] = []
    seen: set[tuple[str, str]] = set()
    depth = max((len(albums) for albums in genre_lists), default=0)

    for rank in range(depth):
        for albums in genre_lists:
            if len(picked) >= count:
                return picked
            if rank >= len(albums):
                continue
            album = albums[rank]
            if album.identity in seen:
                continue
            seen.add(album.identity)
            picked.append(album)
    return picked


class TopChartsPipeline:
    """Cached Last.fm charts with iTunes backfill."""

    def __init__(
        self,
        lastfm: LastFMClient,
        itunes: ITunesClient,
        genres: Sequence[str] = CHART_GENRES,
        top_albums_count: int = TOP_ALBUMS_COUNT,
        chart_limit: int = 50,
        cache: TTLCache[TopChartsResponse] | None = None,
    ) -> None:
        """Initialize pipeline.

        Args:
            lastfm: Last.fm client.
            itunes: iTunes Search client for backfill.
            genres: Genre tags sampled for top albums.
            top_albums_count: Size of the album list.
            chart_limit: Entries requested per Last.fm chart.
            cache: Payload cache (10 minutes by default).
        """
        self.logger = setup_logger("feeds.charts")
        self.genres = tuple(genres)
        self.top_albums_count = top_albums_count
        self.chart_limit = chart_limit
        self._lastfm = lastfm
        self._itunes = itunes
        self._cache = cache or TTLCache(CHARTS_TTL_SECONDS, name="charts")

    async def fetch_top_charts(self) -> TopChartsResponse:
        """Return the cached charts payload, rebuilding it once expired.

        Raises:
            SourceClientError: When top tracks or top artists fail. Nothing
                is cached in that case.
        """
        return await self._cache.get_or_load(CHARTS_CACHE_KEY, self._build_charts)

    async def _build_charts(self) -> TopChartsResponse:
        tracks_result, artists_result, *genre_results = await join_all_tolerant(
            [
                self._lastfm.get_top_tracks(self.chart_limit),
                self._lastfm.get_top_artists(self.chart_limit),
                *(self._lastfm.get_tag_top_albums(tag, self.chart_limit) for tag in self.genres),
            ]
        )
        for required in (tracks_result, artists_result):
            if isinstance(required, Failure):
                raise required.reason

        genre_lists = successes(genre_results)
        if len(genre_lists) < len(self.genres):
            self.logger.warning(
                f"{len(self.genres) - len(genre_lists)} genre album lists unavailable"
            )

        albums = round_robin_albums(genre_lists, self.top_albums_count)
        albums = await self.backfill_albums(albums)

        response = TopChartsResponse(
            tracks=value_or(tracks_result, []),
            artists=value_or(artists_result, []),
            albums=albums,
            fetched_at=datetime.now(UTC),
        )
        self.logger.info(
            f"Charts rebuilt: {len(response.tracks)} tracks, "
            f"{len(response.artists)} artists, {len(response.albums)} albums"
        )
        return response

    # -------------------------------------------------------------------------
    # iTunes backfill
    # -------------------------------------------------------------------------

    async def backfill_albums(self, albums: list[ChartAlbum]) -> list[ChartAlbum]:
        """Fill missing artwork and release dates from iTunes, best-effort."""
        results = await join_all_tolerant(self.backfill_album(album) for album in albums)
        filled = [value_or(result, album) for album, result in zip(albums, results, strict=True)]

        stats = EnrichmentStats(feed="chart albums", total_items=len(albums))
        stats.record(
            "release_dates",
            len(albums),
            sum(1 for album in filled if album.release_date),
        )
        stats.log_summary()
        return filled

    async def backfill_album(self, album: ChartAlbum) -> ChartAlbum:
        """Try query variants until one yields a release date.

        Artwork is taken from the first hit that has some when the album
        has none (missing or Last.fm placeholder).
        """
        if album.image_url and album.release_date:
            return album

        image_url = album.image_url
        release_date = album.release_date
        for term in album_query_variants(album):
            match = await self._itunes.search_album(term)
            if match is None:
                continue
            if image_url is None and match.artwork_url:
                image_url = absolute_url_or_none(match.artwork_url)
            if match.release_date:
                release_date = release_date or match.release_date
                break

        return album.model_copy(update={"image_url": image_url, "release_date": release_date})
