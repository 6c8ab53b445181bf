"""Feed aggregation package.

Schemas are re-exported here; pipelines are imported from their modules
(`bakeboard.feeds.aggregation.games`, ...) since they depend on the
extractors, which themselves depend on the schemas.
"""

from bakeboard.feeds.aggregation.schemas import (
    AlbumRelease,
    ArtistInfo,
    ArtistPreview,
    BookSearchResult,
    ChartAlbum,
    ChartArtist,
    ChartTrack,
    DirectorFilm,
    GameRelease,
    MovieRelease,
    SteamDescription,
    SteamReviewSummary,
    TopChartsResponse,
    WeatherReport,
)

__all__ = [
    "GameRelease",
    "SteamReviewSummary",
    "SteamDescription",
    "MovieRelease",
    "DirectorFilm",
    "AlbumRelease",
    "ArtistInfo",
    "ChartTrack",
    "ChartArtist",
    "ChartAlbum",
    "TopChartsResponse",
    "ArtistPreview",
    "BookSearchResult",
    "WeatherReport",
]
