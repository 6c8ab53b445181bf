"""Normalize MusicBrainz releases into AlbumRelease records."""

from typing import Any

from bakeboard.feeds.aggregation.schemas import (
    DEFAULT_ALBUM_TYPE,
    UNKNOWN_ARTIST,
    AlbumRelease,
)


def release_group_id(release: dict[str, Any]) -> str | None:
    """Return the release-group id of a release, if any."""
    group = release.get("release-group") or {}
    return group.get("id")


def artist_credit_name(release: dict[str, Any]) -> str:
    """Join artist credit names with ", " ("Unknown Artist" when absent)."""
    credits = release.get("artist-credit")
    if not credits:
        return UNKNOWN_ARTIST
    names = [c.get("name") for c in credits if c.get("name")]
    return ", ".join(names) if names else UNKNOWN_ARTIST


def cover_url(cover_art_url: str, release: dict[str, Any]) -> str:
    """Cover Art Archive front image, by release group when known."""
    base = cover_art_url.rstrip("/")
    group_id = release_group_id(release)
    if group_id:
        return f"{base}/release-group/{group_id}/front-500"
    return f"{base}/release/{release['id']}/front-500"


def normalize_release(
    release: dict[str, Any],
    friday: str,
    cover_art_url: str,
) -> AlbumRelease:
    """Convert one MusicBrainz release.

    Args:
        release: Raw release object.
        friday: ISO date of the release Friday.
        cover_art_url: Cover Art Archive base URL.

    Returns:
        AlbumRelease without popularity enrichment.
    """
    group = release.get("release-group") or {}
    return AlbumRelease(
        id=release["id"],
        title=release.get("title") or "",
        artist=artist_credit_name(release),
        cover_url=cover_url(cover_art_url, release),
        release_date=release.get("date") or friday,
        type=group.get("primary-type") or DEFAULT_ALBUM_TYPE,
        friday_date=friday,
    )
