"""MusicBrainz release search client.

MusicBrainz throttles anonymous clients to one request per second; the
fetch client handed in here carries a limiter configured for that.
"""

from datetime import date
from typing import Any

from bakeboard.feeds.http import FetchClient, SourceClientError

RELEASE_TYPES = ("Album", "EP")


def build_friday_query(friday: date) -> str:
    """Lucene query for official albums and EPs released on a day."""
    types = " OR ".join(f"primarytype:{t}" for t in RELEASE_TYPES)
    return f"date:{friday.isoformat()} AND ({types}) AND status:Official"


class MusicBrainzClient:
    """HTTP client for the MusicBrainz web service."""

    def __init__(
        self,
        fetcher: FetchClient,
        base_url: str,
        search_limit: int = 100,
    ) -> None:
        self._fetcher = fetcher
        self._base_url = base_url.rstrip("/")
        self._search_limit = search_limit

    async def search_releases(self, query: str) -> list[dict[str, Any]]:
        """Search releases with a Lucene query.

        Args:
            query: MusicBrainz search query.

        Returns:
            Raw release objects (possibly empty).

        Raises:
            SourceClientError: When the search call fails.
        """
        payload = await self._fetcher.get_json(
            f"{self._base_url}/release",
            params={"query": query, "fmt": "json", "limit": self._search_limit},
        )
        if not isinstance(payload, dict):
            raise SourceClientError("Unexpected MusicBrainz payload", source="musicbrainz")
        return payload.get("releases") or []

    async def search_friday_releases(self, friday: date) -> list[dict[str, Any]]:
        """Search official albums and EPs released on `friday`."""
        return await self.search_releases(build_friday_query(friday))
