"""Spotify extractor: OAuth tokens and listening library."""

from bakeboard.feeds.extractors.spotify.client import SpotifyAuth, SpotifyClient
from bakeboard.feeds.extractors.spotify.tokens import SpotifyTokens, SpotifyTokenStore

__all__ = ["SpotifyAuth", "SpotifyClient", "SpotifyTokens", "SpotifyTokenStore"]
