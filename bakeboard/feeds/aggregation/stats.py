"""Enrichment statistics shared by the feed pipelines."""

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class EnrichmentStats:
    """Counts of secondary lookups attempted and answered.

    Attributes:
        feed: Feed name used in the summary line.
        total_items: Items coming out of the primary source.
        attempted: Lookups attempted per enrichment kind.
        succeeded: Lookups that produced data per enrichment kind.
    """

    feed: str
    total_items: int = 0
    attempted: dict[str, int] = field(default_factory=dict)
    succeeded: dict[str, int] = field(default_factory=dict)

    def record(self, kind: str, attempted: int, succeeded: int) -> None:
        """Record the outcome of one enrichment batch."""
        self.attempted[kind] = self.attempted.get(kind, 0) + attempted
        self.succeeded[kind] = self.succeeded.get(kind, 0) + succeeded

    @property
    def total_failed(self) -> int:
        """Lookups that produced no data."""
        return sum(self.attempted.values()) - sum(self.succeeded.values())

    def log_summary(self) -> None:
        """Log enrichment statistics summary."""
        parts = ", ".join(
            f"{kind}={self.succeeded.get(kind, 0)}/{count}"
            for kind, count in self.attempted.items()
        )
        logger.info(
            "Enrichment complete: %d %s (%s)",
            self.total_items,
            self.feed,
            parts or "no lookups",
        )
