"""IGDB extractor: daily game releases."""

from bakeboard.feeds.extractors.igdb.client import IGDBClient, TwitchTokenProvider
from bakeboard.feeds.extractors.igdb.normalizer import normalize_game

__all__ = ["IGDBClient", "TwitchTokenProvider", "normalize_game"]
