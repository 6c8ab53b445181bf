"""Movie feeds: this week's theatrical releases, now playing, filmographies.

Per-title credits and details are fetched as one tolerant batch: a title
whose lookup fails keeps its place in the feed with null credits.
"""

from datetime import date

from bakeboard.feeds.aggregation.deduplicator import deduplicate_by_id
from bakeboard.feeds.aggregation.ordering import sort_filmography, sort_now_playing
from bakeboard.feeds.aggregation.schemas import DirectorFilm, MovieRelease
from bakeboard.feeds.aggregation.stats import EnrichmentStats
from bakeboard.feeds.extractors.tmdb import TMDBClient, TMDBNormalizer
from bakeboard.feeds.extractors.tmdb.normalizer import DIRECTOR_JOB
from bakeboard.feeds.http import Success, join_all_tolerant, successes
from bakeboard.feeds.utils import release_week, setup_logger
from bakeboard.settings.sources.tmdb import NOW_PLAYING_MAX_PAGES, STALE_AFTER_MONTHS


class MoviePipeline:
    """TMDB movie feeds.

    Attributes:
        max_pages: Now-playing page cap.
        stale_after_months: Age after which now-playing titles sort last.
    """

    def __init__(
        self,
        tmdb: TMDBClient,
        normalizer: TMDBNormalizer,
        max_pages: int = NOW_PLAYING_MAX_PAGES,
        stale_after_months: int = STALE_AFTER_MONTHS,
        item_timeout: float | None = None,
    ) -> None:
        """Initialize pipeline.

        Args:
            tmdb: TMDB client.
            normalizer: TMDB payload normalizer.
            max_pages: Now-playing page cap.
            stale_after_months: Staleness cutoff in months.
            item_timeout: Deadline for per-title lookups.
        """
        self.logger = setup_logger("feeds.movies")
        self.max_pages = max_pages
        self.stale_after_months = stale_after_months
        self._tmdb = tmdb
        self._normalizer = normalizer
        self._item_timeout = item_timeout

    # -------------------------------------------------------------------------
    # Upcoming Friday
    # -------------------------------------------------------------------------

    async def fetch_upcoming_friday_movies(self, today: date | None = None) -> list[MovieRelease]:
        """Theatrical releases of the week ending on the release Friday.

        Args:
            today: Reference day (defaults to today).

        Returns:
            Titles in TMDB popularity order, with credits when available.

        Raises:
            SourceClientError: When the discover call fails.
        """
        week_start, friday = release_week(today or date.today())
        payload = await self._tmdb.discover_theatrical(week_start, friday)
        movies = deduplicate_by_id(payload.get("results") or [])
        self.logger.info(f"Discover returned {len(movies)} titles for {friday.isoformat()}")

        results = await join_all_tolerant(
            self._tmdb.get_movie_credits(movie["id"], timeout=self._item_timeout)
            for movie in movies
        )

        stats = EnrichmentStats(feed="movies", total_items=len(movies))
        stats.record("credits", len(movies), len(successes(results)))
        stats.log_summary()

        return [
            self._normalizer.normalize_movie(
                movie,
                self._normalizer.summarize_credits(result.value)
                if isinstance(result, Success)
                else None,
                friday_date=friday.isoformat(),
            )
            for movie, result in zip(movies, results, strict=True)
        ]

    # -------------------------------------------------------------------------
    # Now playing
    # -------------------------------------------------------------------------

    async def fetch_now_playing_movies(self, today: date | None = None) -> list[MovieRelease]:
        """Titles in theaters, recent first, by descending popularity.

        Page 1 is required; further pages (up to the cap) and per-title
        details are best-effort.

        Args:
            today: Reference day for the staleness cutoff.

        Returns:
            Ordered titles.

        Raises:
            SourceClientError: When the first now-playing page fails.
        """
        first_page = await self._tmdb.now_playing(1)
        last_page = min(int(first_page.get("total_pages") or 1), self.max_pages)

        pages = [first_page]
        if last_page > 1:
            extra = await join_all_tolerant(
                self._tmdb.now_playing(page) for page in range(2, last_page + 1)
            )
            pages.extend(successes(extra))
            if len(pages) < last_page:
                self.logger.warning(f"{last_page - len(pages)} now-playing pages unavailable")

        movies = deduplicate_by_id(movie for page in pages for movie in page.get("results") or [])
        self.logger.info(f"Now playing: {len(movies)} titles from {len(pages)} pages")

        details = await join_all_tolerant(
            self._tmdb.get_movie_with_credits(movie["id"], timeout=self._item_timeout)
            for movie in movies
        )

        stats = EnrichmentStats(feed="movies", total_items=len(movies))
        stats.record("details", len(movies), len(successes(details)))
        stats.log_summary()

        releases = []
        for movie, result in zip(movies, details, strict=True):
            if isinstance(result, Success):
                detail = result.value
                credits = self._normalizer.summarize_credits(detail.get("credits"))
                revenue = self._normalizer.positive_revenue(detail)
            else:
                credits, revenue = None, None
            releases.append(self._normalizer.normalize_movie(movie, credits, revenue=revenue))

        return sort_now_playing(releases, today or date.today(), self.stale_after_months)

    # -------------------------------------------------------------------------
    # Filmography
    # -------------------------------------------------------------------------

    async def fetch_director_filmography(self, person_id: int) -> list[DirectorFilm]:
        """Films a person directed, newest first, undated last.

        Raises:
            SourceClientError: When the person credits call fails.
        """
        payload = await self._tmdb.get_person_movie_credits(person_id)
        directed = [c for c in payload.get("crew") or [] if c.get("job") == DIRECTOR_JOB]
        return [self._normalizer.normalize_director_film(c) for c in sort_filmography(directed)]
