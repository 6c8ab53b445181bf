"""BakeBoard: release and trending-content feeds for a personal dashboard."""

__version__ = "1.0.0"
