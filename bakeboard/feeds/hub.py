"""Feed hub: wires settings, HTTP, limiters, caches and pipelines.

One FeedHub per process. It owns the shared httpx.AsyncClient (unless one
is injected), one rate limiter per limited source and the process-lifetime
caches, and exposes one coroutine per feed.

Usage:
    async with FeedHub() as hub:
        games = await hub.fetch_today_game_releases()
"""

from collections.abc import Iterable
from types import TracebackType

import httpx

from bakeboard.feeds.aggregation.albums import AlbumReleasePipeline
from bakeboard.feeds.aggregation.charts import TopChartsPipeline
from bakeboard.feeds.aggregation.dismissal import (
    DismissedStore,
    ItemT,
    JsonDismissedStore,
    apply_dismissals,
)
from bakeboard.feeds.aggregation.games import GameReleasePipeline
from bakeboard.feeds.aggregation.movies import MoviePipeline
from bakeboard.feeds.aggregation.schemas import (
    AlbumRelease,
    ArtistInfo,
    ArtistPreview,
    BookSearchResult,
    DirectorFilm,
    GameRelease,
    MovieRelease,
    SteamDescription,
    SteamReviewSummary,
    TopChartsResponse,
    WeatherReport,
)
from bakeboard.feeds.extractors.igdb import IGDBClient, TwitchTokenProvider
from bakeboard.feeds.extractors.itunes import ITunesClient
from bakeboard.feeds.extractors.lastfm import LastFMClient
from bakeboard.feeds.extractors.musicbrainz import MusicBrainzClient
from bakeboard.feeds.extractors.openlibrary import OpenLibraryClient
from bakeboard.feeds.extractors.spotify import SpotifyAuth, SpotifyClient, SpotifyTokenStore
from bakeboard.feeds.extractors.steam import SteamClient
from bakeboard.feeds.extractors.tmdb import TMDBClient, TMDBNormalizer
from bakeboard.feeds.extractors.weather import WeatherClient
from bakeboard.feeds.http import FetchClient, SlidingWindowRateLimiter, TTLCache
from bakeboard.feeds.utils import setup_logger
from bakeboard.settings import Settings, settings


class FeedConfigurationError(Exception):
    """Raised when a feed is requested without its credentials."""

    pass


class FeedHub:
    """Entry point to every feed.

    Attributes:
        config: Settings the hub was built from.
    """

    def __init__(
        self,
        config: Settings | None = None,
        http: httpx.AsyncClient | None = None,
        dismissed_store: DismissedStore | None = None,
    ) -> None:
        """Initialize hub and its source clients.

        Args:
            config: Settings (defaults to the singleton).
            http: Shared HTTP client; created and owned when None.
            dismissed_store: Dismissal storage (JSON file by default).
        """
        self.config = config or settings
        self.logger = setup_logger("feeds.hub")

        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(
            headers={"User-Agent": self.config.http.user_agent},
            follow_redirects=True,
        )
        self._dismissed_store = dismissed_store or JsonDismissedStore(
            self.config.paths.dismissed_file
        )

        self._build_limiters()
        self._build_clients()
        self._build_pipelines()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "FeedHub":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if the hub created it."""
        if self._owns_http:
            await self._http.aclose()

    # -------------------------------------------------------------------------
    # Wiring
    # -------------------------------------------------------------------------

    def _build_limiters(self) -> None:
        cfg = self.config
        self.lastfm_limiter = SlidingWindowRateLimiter(
            cfg.lastfm.requests_per_period,
            cfg.lastfm.period_seconds,
            name="lastfm",
        )
        self.musicbrainz_limiter: SlidingWindowRateLimiter | None = None
        if cfg.musicbrainz.min_request_delay > 0:
            self.musicbrainz_limiter = SlidingWindowRateLimiter(
                1,
                cfg.musicbrainz.min_request_delay,
                min_interval=cfg.musicbrainz.min_request_delay,
                name="musicbrainz",
            )

    def _fetcher(
        self,
        source: str,
        *,
        limiter: SlidingWindowRateLimiter | None = None,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
    ) -> FetchClient:
        return FetchClient(
            source,
            self._http,
            limiter=limiter,
            timeout=timeout or self.config.http.item_timeout,
            headers=headers,
        )

    def _build_clients(self) -> None:
        cfg = self.config
        list_timeout = cfg.http.list_timeout

        self.twitch_tokens = TwitchTokenProvider(
            self._fetcher("twitch"),
            cfg.igdb.client_id,
            cfg.igdb.client_secret,
            cfg.igdb.token_url,
        )
        self.igdb = IGDBClient(
            self._fetcher("igdb", timeout=list_timeout),
            self.twitch_tokens,
            cfg.igdb.base_url,
            cfg.igdb.release_limit,
        )
        self.steam = SteamClient(
            self._fetcher("steam"),
            cfg.steam.store_url,
            cfg.steam.country,
            cfg.steam.language,
        )
        self.tmdb = TMDBClient(
            self._fetcher("tmdb", timeout=list_timeout),
            cfg.tmdb.api_key,
            cfg.tmdb.base_url,
            cfg.tmdb.region,
            cfg.tmdb.release_types,
        )
        self.musicbrainz = MusicBrainzClient(
            self._fetcher(
                "musicbrainz",
                limiter=self.musicbrainz_limiter,
                timeout=list_timeout,
                headers={"User-Agent": cfg.musicbrainz.user_agent, "Accept": "application/json"},
            ),
            cfg.musicbrainz.base_url,
            cfg.musicbrainz.search_limit,
        )
        self.artist_cache: TTLCache[ArtistInfo] = TTLCache(None, name="lastfm.artists")
        self.lastfm = LastFMClient(
            self._fetcher("lastfm", limiter=self.lastfm_limiter),
            cfg.lastfm.api_key,
            cfg.lastfm.base_url,
            self.artist_cache,
            item_timeout=cfg.http.item_timeout,
            list_timeout=list_timeout,
        )
        self.itunes = ITunesClient(
            self._fetcher("itunes"),
            cfg.itunes.search_url,
            cfg.itunes.artwork_size,
        )
        self.openlibrary = OpenLibraryClient(
            self._fetcher("openlibrary", timeout=list_timeout),
            cfg.openlibrary.search_url,
            cfg.openlibrary.covers_url,
            cfg.openlibrary.search_limit,
        )
        self.weather = WeatherClient(
            self._fetcher("weather"),
            cfg.weather.forecast_url,
            cfg.weather.latitude,
            cfg.weather.longitude,
            cfg.weather.location_name,
        )

        self.spotify_auth: SpotifyAuth | None = None
        self.spotify: SpotifyClient | None = None
        if cfg.spotify.is_configured:
            self.spotify_auth = SpotifyAuth(
                self._fetcher("spotify.accounts"),
                SpotifyTokenStore(cfg.paths.spotify_tokens_file),
                cfg.spotify.client_id,
                cfg.spotify.client_secret,
                cfg.spotify.redirect_uri,
                cfg.spotify.accounts_url,
                cfg.spotify.scopes,
            )
            self.spotify = SpotifyClient(self._fetcher("spotify"), cfg.spotify.api_url)

    def _build_pipelines(self) -> None:
        cfg = self.config
        self.games = GameReleasePipeline(self.igdb, self.steam, cfg.igdb.pc_platforms)
        self.movies = MoviePipeline(
            self.tmdb,
            TMDBNormalizer(
                cfg.tmdb.image_base_url,
                cfg.tmdb.site_url,
                cfg.tmdb.horror_genre_id,
                cfg.tmdb.cast_limit,
            ),
            cfg.tmdb.now_playing_max_pages,
            cfg.tmdb.stale_after_months,
            cfg.http.item_timeout,
        )
        self.albums = AlbumReleasePipeline(
            self.musicbrainz,
            self.lastfm if cfg.lastfm.is_configured else None,
            cfg.musicbrainz.cover_art_url,
            self.spotify_auth,
            self.spotify,
        )
        self.charts = TopChartsPipeline(
            self.lastfm,
            self.itunes,
            cfg.lastfm.chart_genres,
            cfg.lastfm.top_albums_count,
            cfg.lastfm.chart_limit,
            TTLCache(cfg.lastfm.charts_ttl_seconds, name="charts"),
        )

    def _require(self, source: str, configured: bool) -> None:
        if not configured:
            raise FeedConfigurationError(f"{source} credentials are not configured")

    # -------------------------------------------------------------------------
    # Feeds
    # -------------------------------------------------------------------------

    async def fetch_today_game_releases(self) -> list[GameRelease]:
        """Games released today (UTC), Steam-enriched and sorted."""
        self._require("Twitch", self.config.igdb.is_configured)
        return await self.games.fetch_today_game_releases()

    async def fetch_all_steam_reviews(
        self,
        games: Iterable[GameRelease],
    ) -> dict[str, SteamReviewSummary]:
        """Steam review summaries keyed by app id."""
        return await self.games.fetch_all_steam_reviews(games)

    async def fetch_all_steam_descriptions(
        self,
        games: Iterable[GameRelease],
    ) -> dict[str, SteamDescription]:
        """Steam descriptions keyed by app id."""
        return await self.games.fetch_all_steam_descriptions(games)

    async def fetch_upcoming_friday_movies(self) -> list[MovieRelease]:
        """Theatrical releases of the current release week."""
        self._require("TMDB", self.config.tmdb.is_configured)
        return await self.movies.fetch_upcoming_friday_movies()

    async def fetch_now_playing_movies(self) -> list[MovieRelease]:
        """Titles in theaters, recent first."""
        self._require("TMDB", self.config.tmdb.is_configured)
        return await self.movies.fetch_now_playing_movies()

    async def fetch_director_filmography(self, person_id: int) -> list[DirectorFilm]:
        """Films directed by a TMDB person."""
        self._require("TMDB", self.config.tmdb.is_configured)
        return await self.movies.fetch_director_filmography(person_id)

    async def fetch_upcoming_friday_albums(self) -> list[AlbumRelease]:
        """Albums and EPs out on the release Friday."""
        return await self.albums.fetch_upcoming_friday_albums()

    async def fetch_all_artist_popularity(
        self,
        albums: Iterable[AlbumRelease],
    ) -> dict[str, ArtistInfo]:
        """Last.fm info keyed by lowercased artist."""
        return await self.albums.fetch_all_artist_popularity(albums)

    async def fetch_top_charts(self) -> TopChartsResponse:
        """Cached Last.fm charts with diversified top albums."""
        self._require("Last.fm", self.config.lastfm.is_configured)
        return await self.charts.fetch_top_charts()

    async def fetch_artist_top_preview(self, artist: str) -> ArtistPreview | None:
        """A song preview for an artist, None when iTunes has none."""
        return await self.itunes.fetch_artist_top_preview(artist)

    async def search_books(self, query: str) -> list[BookSearchResult]:
        """Open Library search."""
        return await self.openlibrary.search_books(query)

    async def fetch_weather(self) -> WeatherReport:
        """Current conditions at the configured location."""
        return await self.weather.fetch_current()

    # -------------------------------------------------------------------------
    # Dismissals
    # -------------------------------------------------------------------------

    @property
    def dismissed_store(self) -> DismissedStore:
        """Storage for dismissed card ids."""
        return self._dismissed_store

    async def apply_dismissals(self, items: list[ItemT], category: str) -> list[ItemT]:
        """Drop dismissed items from a feed."""
        return await apply_dismissals(items, category, self._dismissed_store)
