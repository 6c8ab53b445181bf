"""iTunes extractor: artwork backfill and song previews."""

from bakeboard.feeds.extractors.itunes.client import ITunesAlbumMatch, ITunesClient

__all__ = ["ITunesClient", "ITunesAlbumMatch"]
