"""Parse Steam storefront payloads."""

from typing import Any

from bakeboard.feeds.aggregation.schemas import SteamDescription, SteamReviewSummary


def pick_search_match(name: str, items: list[dict[str, Any]]) -> str | None:
    """Choose the Steam app for a game name.

    An exact case-insensitive title match wins; otherwise the first hit.

    Args:
        name: Game title to match.
        items: `items` array from the store search.

    Returns:
        Steam app id as a string, or None when there are no hits.
    """
    candidates = [item for item in items if item.get("id") is not None]
    if not candidates:
        return None

    wanted = name.strip().casefold()
    for item in candidates:
        if str(item.get("name", "")).strip().casefold() == wanted:
            return str(item["id"])
    return str(candidates[0]["id"])


def parse_review_summary(payload: Any) -> SteamReviewSummary | None:
    """Parse an `appreviews` response, None unless successful."""
    if not isinstance(payload, dict) or not payload.get("success"):
        return None
    summary = payload.get("query_summary")
    if not summary:
        return None
    return SteamReviewSummary(
        total_positive=summary.get("total_positive", 0),
        total_negative=summary.get("total_negative", 0),
        total_reviews=summary.get("total_reviews", 0),
        review_score_desc=summary.get("review_score_desc", ""),
    )


def parse_app_details(app_id: str, payload: Any) -> SteamDescription | None:
    """Parse an `appdetails` response for one app, None unless successful."""
    if not isinstance(payload, dict):
        return None
    entry = payload.get(str(app_id))
    if not entry or not entry.get("success"):
        return None
    data = entry.get("data") or {}
    return SteamDescription(
        short_description=data.get("short_description") or "",
        header_image=data.get("header_image"),
    )
