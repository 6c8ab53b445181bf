"""Game release pipeline: IGDB releases enriched from the Steam store.

Steps:
    1. One IGDB query for games first released during the current UTC day
       (one record per IGDB id)
    2. Steam app id backfill for PC games IGDB does not link to Steam
    3. Concurrent Steam reviews and descriptions per app id
    4. Sort by hypes + follows, then title
"""

from collections.abc import Iterable
from datetime import datetime

from bakeboard.feeds.aggregation.deduplicator import deduplicate_by_id
from bakeboard.feeds.aggregation.ordering import sort_games
from bakeboard.feeds.aggregation.schemas import GameRelease, SteamDescription, SteamReviewSummary
from bakeboard.feeds.aggregation.stats import EnrichmentStats
from bakeboard.feeds.extractors.igdb import IGDBClient, normalize_game
from bakeboard.feeds.extractors.steam import SteamClient
from bakeboard.feeds.http import join_all_tolerant, map_tolerant, value_or
from bakeboard.feeds.utils import setup_logger, utc_day_bounds
from bakeboard.settings.sources.igdb import PC_PLATFORMS


def needs_store_search(game: GameRelease, pc_platforms: frozenset[str] = PC_PLATFORMS) -> bool:
    """True when a game has no Steam id but ships on a PC platform."""
    return game.steam_app_id is None and not pc_platforms.isdisjoint(game.platforms)


class GameReleasePipeline:
    """Today's game releases with Steam enrichment."""

    def __init__(
        self,
        igdb: IGDBClient,
        steam: SteamClient,
        pc_platforms: frozenset[str] = PC_PLATFORMS,
    ) -> None:
        """Initialize pipeline.

        Args:
            igdb: IGDB client (primary source).
            steam: Steam store client (enrichment).
            pc_platforms: Platform names that make a game worth a store search.
        """
        self.logger = setup_logger("feeds.games")
        self._igdb = igdb
        self._steam = steam
        self._pc_platforms = pc_platforms

    async def fetch_today_game_releases(self, now: datetime | None = None) -> list[GameRelease]:
        """Fetch, enrich and sort games released today (UTC).

        Args:
            now: Reference instant (defaults to the current time).

        Returns:
            Sorted releases; empty when nothing was released.

        Raises:
            SourceClientError: When the IGDB query fails.
        """
        start, end = utc_day_bounds(now)
        raw_games = await self._igdb.fetch_releases_between(start, end)
        games = deduplicate_by_id(normalize_game(raw) for raw in raw_games)
        self.logger.info(f"IGDB returned {len(games)} releases")
        if not games:
            return []

        stats = EnrichmentStats(feed="games", total_items=len(games))
        games = await self.backfill_steam_ids(games, stats)

        reviews, descriptions = await self._fetch_enrichments(games)
        linked = len({g.steam_app_id for g in games if g.steam_app_id})
        stats.record("reviews", linked, len(reviews))
        stats.record("descriptions", linked, len(descriptions))

        enriched = [self._apply_enrichments(g, reviews, descriptions) for g in games]
        stats.log_summary()
        return sort_games(enriched)

    # -------------------------------------------------------------------------
    # Steam id backfill
    # -------------------------------------------------------------------------

    async def backfill_steam_ids(
        self,
        games: list[GameRelease],
        stats: EnrichmentStats | None = None,
    ) -> list[GameRelease]:
        """Search the Steam store for PC games lacking a Steam id.

        Games outside the PC platform set, and games the search cannot
        match, keep a null Steam id.

        Args:
            games: Normalized IGDB releases.
            stats: Optional statistics to update.

        Returns:
            Games in the same order, with found ids filled in.
        """
        targets = [g for g in games if needs_store_search(g, self._pc_platforms)]
        if not targets:
            return games

        results = await join_all_tolerant(self._steam.search_app_id(g.name) for g in targets)
        found = {
            game.id: app_id
            for game, result in zip(targets, results, strict=True)
            if (app_id := value_or(result, None)) is not None
        }
        if stats is not None:
            stats.record("store_search", len(targets), len(found))

        return [
            g.model_copy(update={"steam_app_id": found[g.id]}) if g.id in found else g
            for g in games
        ]

    # -------------------------------------------------------------------------
    # Steam enrichment
    # -------------------------------------------------------------------------

    async def fetch_all_steam_reviews(
        self,
        games: Iterable[GameRelease],
    ) -> dict[str, SteamReviewSummary]:
        """Review summaries keyed by Steam app id (missing ids are absent)."""
        app_ids = [g.steam_app_id for g in games if g.steam_app_id]
        return await map_tolerant(app_ids, self._steam.fetch_review_summary)

    async def fetch_all_steam_descriptions(
        self,
        games: Iterable[GameRelease],
    ) -> dict[str, SteamDescription]:
        """Store descriptions keyed by Steam app id (missing ids are absent)."""
        app_ids = [g.steam_app_id for g in games if g.steam_app_id]
        return await map_tolerant(app_ids, self._steam.fetch_description)

    async def _fetch_enrichments(
        self,
        games: list[GameRelease],
    ) -> tuple[dict[str, SteamReviewSummary], dict[str, SteamDescription]]:
        reviews_result, descriptions_result = await join_all_tolerant(
            [self.fetch_all_steam_reviews(games), self.fetch_all_steam_descriptions(games)]
        )
        return value_or(reviews_result, {}), value_or(descriptions_result, {})

    @staticmethod
    def _apply_enrichments(
        game: GameRelease,
        reviews: dict[str, SteamReviewSummary],
        descriptions: dict[str, SteamDescription],
    ) -> GameRelease:
        if not game.steam_app_id:
            return game

        description = descriptions.get(game.steam_app_id)
        update: dict[str, object] = {
            "steam_reviews": reviews.get(game.steam_app_id),
            "steam_description": description,
        }
        # Header image stands in for a missing IGDB cover
        if game.cover_url is None and description is not None and description.header_image:
            update["cover_url"] = description.header_image
        return game.model_copy(update=update)
