"""Feed utilities package: logging and release window arithmetic."""

from bakeboard.feeds.utils.dates import (
    months_before,
    parse_iso_date,
    release_friday,
    release_week,
    timestamp_to_iso_date,
    utc_day_bounds,
)
from bakeboard.feeds.utils.logger import setup_logger

__all__ = [
    "setup_logger",
    "release_friday",
    "release_week",
    "utc_day_bounds",
    "months_before",
    "parse_iso_date",
    "timestamp_to_iso_date",
]
