"""Steam storefront client: app search, review summaries, descriptions.

Every call here is an enrichment: failures resolve to None.
"""

import logging

from bakeboard.feeds.aggregation.schemas import SteamDescription, SteamReviewSummary
from bakeboard.feeds.extractors.steam.normalizer import (
    parse_app_details,
    parse_review_summary,
    pick_search_match,
)
from bakeboard.feeds.http import FetchClient

logger = logging.getLogger(__name__)


class SteamClient:
    """Client for Steam's public store endpoints."""

    def __init__(
        self,
        fetcher: FetchClient,
        store_url: str,
        country: str = "US",
        language: str = "english",
    ) -> None:
        self._fetcher = fetcher
        self._store_url = store_url.rstrip("/")
        self._country = country
        self._language = language

    async def search_app_id(self, name: str) -> str | None:
        """Search the store for a game name and return the matching app id."""
        payload = await self._fetcher.try_get_json(
            f"{self._store_url}/api/storesearch/",
            params={"term": name, "l": self._language, "cc": self._country},
        )
        if not isinstance(payload, dict):
            return None
        app_id = pick_search_match(name, payload.get("items") or [])
        if app_id is None:
            logger.debug(f"No Steam match for '{name}'")
        return app_id

    async def fetch_review_summary(self, app_id: str) -> SteamReviewSummary | None:
        """Fetch the review summary of an app."""
        payload = await self._fetcher.try_get_json(
            f"{self._store_url}/appreviews/{app_id}",
            params={"json": 1, "language": "all", "purchase_type": "all"},
        )
        return parse_review_summary(payload)

    async def fetch_description(self, app_id: str) -> SteamDescription | None:
        """Fetch the short description and header image of an app."""
        payload = await self._fetcher.try_get_json(
            f"{self._store_url}/api/appdetails",
            params={"appids": app_id, "filters": "basic", "l": self._language},
        )
        return parse_app_details(app_id, payload)
