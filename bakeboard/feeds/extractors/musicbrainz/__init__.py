"""MusicBrainz extractor: Friday album releases."""

from bakeboard.feeds.extractors.musicbrainz.client import MusicBrainzClient, build_friday_query
from bakeboard.feeds.extractors.musicbrainz.normalizer import (
    artist_credit_name,
    normalize_release,
    release_group_id,
)

__all__ = [
    "MusicBrainzClient",
    "build_friday_query",
    "normalize_release",
    "artist_credit_name",
    "release_group_id",
]
