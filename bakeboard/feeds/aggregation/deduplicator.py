"""Release deduplication module.

Removes duplicate items from feed lists by a key: the item id for games
and movies, the MusicBrainz release-group for albums. The first
occurrence wins and input order is kept.
"""

import logging
from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass
from typing import Any, TypeVar

from bakeboard.feeds.extractors.musicbrainz.normalizer import release_group_id

logger = logging.getLogger(__name__)

T = TypeVar("T")


# =============================================================================
# DEDUPLICATION STATISTICS
# =============================================================================


@dataclass
class DeduplicationStats:
    """Statistics for deduplication operations.

    Attributes:
        total_input: Items before deduplication.
        duplicates: Items dropped because their key was already seen.
        missing_key: Items dropped because they had no key.
        total_output: Items after deduplication.
    """

    total_input: int = 0
    duplicates: int = 0
    missing_key: int = 0
    total_output: int = 0

    @property
    def total_dropped(self) -> int:
        """Calculate total items dropped."""
        return self.duplicates + self.missing_key

    def log_summary(self, label: str = "items") -> None:
        """Log deduplication statistics summary."""
        logger.info(
            "Deduplication: %d -> %d %s (-%d: duplicates=%d, no key=%d)",
            self.total_input,
            self.total_output,
            label,
            self.total_dropped,
            self.duplicates,
            self.missing_key,
        )


# =============================================================================
# DEDUPLICATION
# =============================================================================


def deduplicate_by_key(
    items: Iterable[T],
    key: Callable[[T], Hashable | None],
    stats: DeduplicationStats | None = None,
) -> list[T]:
    """Keep the first item for every key, preserving order.

    Items whose key is None are dropped.

    Args:
        items: Items to deduplicate.
        key: Key extractor.
        stats: Optional statistics to update.

    Returns:
        Deduplicated list.
    """
    stats = stats if stats is not None else DeduplicationStats()
    seen: set[Hashable] = set()
    unique: list[T] = []

    for item in items:
        stats.total_input += 1
        item_key = key(item)
        if item_key is None:
            stats.missing_key += 1
            continue
        if item_key in seen:
            stats.duplicates += 1
            continue
        seen.add(item_key)
        unique.append(item)

    stats.total_output = len(unique)
    return unique


def deduplicate_by_id(items: Iterable[T]) -> list[T]:
    """Deduplicate records or raw payloads by their `id`."""
    return deduplicate_by_key(items, _item_id)


def deduplicate_release_groups(
    releases: Iterable[dict[str, Any]],
    stats: DeduplicationStats | None = None,
) -> list[dict[str, Any]]:
    """Keep one MusicBrainz release per release group.

    Regional and format variants of one album share a release group.
    Releases without a group are dropped.

    Args:
        releases: Raw MusicBrainz releases.
        stats: Optional statistics to update.

    Returns:
        First release of every group, in input order.
    """
    return deduplicate_by_key(releases, release_group_id, stats)


def _item_id(item: Any) -> Hashable | None:
    if isinstance(item, dict):
        return item.get("id")
    return getattr(item, "id", None)
