"""TMDB data normalizer.

Transforms raw TMDB movie, credits and person payloads into the
MovieRelease and DirectorFilm records of the movie feeds.
"""

from dataclasses import dataclass, field
from typing import Any

from bakeboard.feeds.aggregation.schemas import DirectorFilm, MovieRelease

POSTER_SIZE = "w500"
FILMOGRAPHY_POSTER_SIZE = "w200"
DIRECTOR_JOB = "Director"


@dataclass(frozen=True)
class CreditsSummary:
    """Director and top-billed cast extracted from a credits object.

    Attributes:
        director: Director name.
        director_id: Director person id.
        cast: Top-billed cast names.
    """

    director: str | None = None
    director_id: int | None = None
    cast: list[str] = field(default_factory=list)


class TMDBNormalizer:
    """Normalizer for TMDB payloads.

    Attributes:
        image_base_url: Image CDN base URL (without size).
        site_url: Public TMDB site for item links.
        horror_genre_id: Genre id flagged as horror.
        cast_limit: Billed cast members kept.
    """

    def __init__(
        self,
        image_base_url: str,
        site_url: str,
        horror_genre_id: int = 27,
        cast_limit: int = 4,
    ) -> None:
        self.image_base_url = image_base_url.rstrip("/")
        self.site_url = site_url.rstrip("/")
        self.horror_genre_id = horror_genre_id
        self.cast_limit = cast_limit

    def image_url(self, path: str | None, size: str = POSTER_SIZE) -> str | None:
        """Build a full image URL from a TMDB path."""
        if not path:
            return None
        return f"{self.image_base_url}/{size}{path}"

    def summarize_credits(self, credits: dict[str, Any] | None) -> CreditsSummary:
        """Extract the director and first billed cast members.

        Args:
            credits: TMDB credits object (`cast` and `crew` arrays).

        Returns:
            CreditsSummary (empty when credits are missing).
        """
        if not credits:
            return CreditsSummary()

        director_entry = next(
            (c for c in credits.get("crew") or [] if c.get("job") == DIRECTOR_JOB),
            None,
        )
        billed = sorted(
            (c for c in credits.get("cast") or [] if c.get("name")),
            key=lambda c: c.get("order", 0),
        )
        return CreditsSummary(
            director=director_entry.get("name") if director_entry else None,
            director_id=director_entry.get("id") if director_entry else None,
            cast=[c["name"] for c in billed[: self.cast_limit]],
        )

    def normalize_movie(
        self,
        raw: dict[str, Any],
        credits: CreditsSummary | None,
        *,
        friday_date: str = "",
        revenue: int | None = None,
    ) -> MovieRelease:
        """Build a MovieRelease from a list entry and optional credits.

        Args:
            raw: Discover or now-playing result.
            credits: Summarized credits, None when the fetch failed.
            friday_date: Release Friday label.
            revenue: Positive revenue or None.

        Returns:
            MovieRelease.
        """
        movie_id = raw["id"]
        return MovieRelease(
            id=movie_id,
            title=raw.get("title") or "",
            poster_url=self.image_url(raw.get("poster_path")),
            release_date=raw.get("release_date") or "",
            director=credits.director if credits else None,
            director_id=credits.director_id if credits else None,
            cast=list(credits.cast) if credits else None,
            overview=raw.get("overview") or "",
            tmdb_url=f"{self.site_url}/movie/{movie_id}",
            friday_date=friday_date,
            revenue=revenue,
            popularity=raw.get("popularity") or 0.0,
            is_horror=self.horror_genre_id in (raw.get("genre_ids") or []),
        )

    @staticmethod
    def positive_revenue(detail: dict[str, Any]) -> int | None:
        """Return revenue when it is a positive number, else None."""
        revenue = detail.get("revenue")
        if isinstance(revenue, int | float) and revenue > 0:
            return int(revenue)
        return None

    def normalize_director_film(self, raw: dict[str, Any]) -> DirectorFilm:
        """Build a DirectorFilm from a person crew credit."""
        release_date = raw.get("release_date") or ""
        return DirectorFilm(
            title=raw.get("title") or "",
            year=release_date[:4],
            poster_url=self.image_url(raw.get("poster_path"), FILMOGRAPHY_POSTER_SIZE),
        )
