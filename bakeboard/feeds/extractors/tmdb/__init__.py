"""TMDB extractor: theatrical releases, now playing, filmographies."""

from bakeboard.feeds.extractors.tmdb.client import TMDBClient, TMDBClientError
from bakeboard.feeds.extractors.tmdb.normalizer import CreditsSummary, TMDBNormalizer

__all__ = ["TMDBClient", "TMDBClientError", "TMDBNormalizer", "CreditsSummary"]
