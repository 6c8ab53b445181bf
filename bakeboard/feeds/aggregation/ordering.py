"""Deterministic sort orders for the feeds.

Every comparator ends in a stable tie-break so a feed renders identically
for identical upstream data.
"""

from collections.abc import Iterable
from datetime import date

from bakeboard.feeds.aggregation.schemas import AlbumRelease, GameRelease, MovieRelease
from bakeboard.feeds.utils.dates import months_before, parse_iso_date
from bakeboard.settings.sources.tmdb import STALE_AFTER_MONTHS


def title_sort_key(text: str) -> tuple[str, str]:
    """Locale-style key: case-insensitive first, exact text as tie-break."""
    return text.casefold(), text


# -----------------------------------------------------------------------------
# Games
# -----------------------------------------------------------------------------


def game_sort_key(game: GameRelease) -> tuple[int, tuple[str, str]]:
    """Descending hypes + follows, then ascending title."""
    return -game.popularity, title_sort_key(game.name)


def sort_games(games: Iterable[GameRelease]) -> list[GameRelease]:
    """Order games by combined popularity."""
    return sorted(games, key=game_sort_key)


# -----------------------------------------------------------------------------
# Albums
# -----------------------------------------------------------------------------


def album_sort_key(album: AlbumRelease) -> tuple[int, int, tuple[str, str]]:
    """Known listener counts first (descending), then unknown by artist."""
    if album.artist_listeners is not None:
        return 0, -album.artist_listeners, ("", "")
    return 1, 0, title_sort_key(album.artist)


def sort_albums(albums: Iterable[AlbumRelease]) -> list[AlbumRelease]:
    """Order albums by artist popularity."""
    return sorted(albums, key=album_sort_key)


# -----------------------------------------------------------------------------
# Movies
# -----------------------------------------------------------------------------


def is_stale(movie: MovieRelease, cutoff: date) -> bool:
    """True when the title was released before `cutoff`.

    A missing or unparseable release date is never stale.
    """
    released = parse_iso_date(movie.release_date)
    return released is not None and released < cutoff


def sort_now_playing(
    movies: Iterable[MovieRelease],
    today: date,
    stale_after_months: int = STALE_AFTER_MONTHS,
) -> list[MovieRelease]:
    """Recent titles first, each bucket by descending popularity.

    Args:
        movies: Now-playing titles.
        today: Reference day for the staleness cutoff.
        stale_after_months: Age in months after which a title is stale.

    Returns:
        Ordered titles.
    """
    cutoff = months_before(today, stale_after_months)
    return sorted(movies, key=lambda m: (is_stale(m, cutoff), -m.popularity))


def sort_filmography(credits: Iterable[dict]) -> list[dict]:
    """Order raw crew credits by descending release date, undated last."""
    return sorted(credits, key=lambda c: c.get("release_date") or "", reverse=True)
