"""Last.fm extractor: artist popularity and charts."""

from bakeboard.feeds.extractors.lastfm.client import LastFMClient, LastFMClientError
from bakeboard.feeds.extractors.lastfm.normalizer import is_placeholder_image

__all__ = ["LastFMClient", "LastFMClientError", "is_placeholder_image"]
