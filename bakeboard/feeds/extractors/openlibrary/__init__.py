"""Open Library extractor: book search."""

from bakeboard.feeds.extractors.openlibrary.client import OpenLibraryClient, normalize_doc

__all__ = ["OpenLibraryClient", "normalize_doc"]
