"""Steam extractor: store search, reviews, descriptions."""

from bakeboard.feeds.extractors.steam.client import SteamClient

__all__ = ["SteamClient"]
