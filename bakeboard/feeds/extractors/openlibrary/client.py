"""Open Library book search client."""

from typing import Any

from bakeboard.feeds.aggregation.schemas import BookSearchResult
from bakeboard.feeds.http import FetchClient, SourceClientError

WORKS_PREFIX = "/works/"


def normalize_doc(doc: dict[str, Any], covers_url: str) -> BookSearchResult:
    """Convert one search doc.

    Args:
        doc: Open Library search doc.
        covers_url: Covers CDN base URL.

    Returns:
        BookSearchResult.
    """
    raw_key = doc.get("key") or ""
    work_id = raw_key.removeprefix(WORKS_PREFIX)
    cover_id = doc.get("cover_i")
    authors = doc.get("author_name") or []
    first_year = doc.get("first_publish_year")
    return BookSearchResult(
        id=work_id,
        title=doc.get("title") or "",
        subtitle=authors[0] if authors else "",
        image_url=f"{covers_url.rstrip('/')}/b/id/{cover_id}-M.jpg" if cover_id else None,
        release_date=str(first_year) if first_year else "",
    )


class OpenLibraryClient:
    """HTTP client for Open Library search."""

    def __init__(
        self,
        fetcher: FetchClient,
        search_url: str,
        covers_url: str,
        search_limit: int = 10,
    ) -> None:
        self._fetcher = fetcher
        self._search_url = search_url
        self._covers_url = covers_url
        self._search_limit = search_limit

    async def search_books(self, query: str) -> list[BookSearchResult]:
        """Search books by free text.

        Raises:
            SourceClientError: When the search call fails.
        """
        payload = await self._fetcher.get_json(
            self._search_url,
            params={"q": query, "limit": self._search_limit},
        )
        if not isinstance(payload, dict):
            raise SourceClientError("Unexpected Open Library payload", source="openlibrary")
        return [normalize_doc(doc, self._covers_url) for doc in payload.get("docs") or []]
