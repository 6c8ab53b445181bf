"""Normalize IGDB game objects into GameRelease records."""

from typing import Any

from bakeboard.feeds.aggregation.schemas import GameRelease
from bakeboard.feeds.utils.dates import timestamp_to_iso_date

STEAM_EXTERNAL_CATEGORY = 1
"""IGDB external_games category for Steam."""

OFFICIAL_WEBSITE_CATEGORY = 1
"""IGDB websites category for the official site."""


def cover_url(raw_cover: dict[str, Any] | None) -> str | None:
    """Upgrade IGDB's thumbnail URL to the big cover size."""
    if not raw_cover or not raw_cover.get("url"):
        return None
    return str(raw_cover["url"]).replace("t_thumb", "t_cover_big")


def steam_app_id(external_games: list[dict[str, Any]] | None) -> str | None:
    """Extract the Steam uid from IGDB external references."""
    for external in external_games or []:
        if external.get("category") == STEAM_EXTERNAL_CATEGORY and external.get("uid"):
            return str(external["uid"])
    return None


def website_url(websites: list[dict[str, Any]] | None) -> str | None:
    """Return the official website, else the first listed one."""
    urls = [w for w in websites or [] if w.get("url")]
    for site in urls:
        if site.get("category") == OFFICIAL_WEBSITE_CATEGORY:
            return site["url"]
    return urls[0]["url"] if urls else None


def normalize_game(raw: dict[str, Any]) -> GameRelease:
    """Convert one IGDB game object.

    Args:
        raw: IGDB game with expanded cover, platforms, external games, websites.

    Returns:
        GameRelease without Steam enrichment.
    """
    return GameRelease(
        id=raw["id"],
        name=raw.get("name") or "",
        cover_url=cover_url(raw.get("cover")),
        platforms=[p["name"] for p in raw.get("platforms") or [] if p.get("name")],
        steam_app_id=steam_app_id(raw.get("external_games")),
        website_url=website_url(raw.get("websites")),
        release_date=timestamp_to_iso_date(raw.get("first_release_date")),
        hypes=raw.get("hypes") or 0,
        follows=raw.get("follows") or 0,
    )
