"""Pydantic schemas for aggregated feed items.

Defines the normalized release records returned by each feed and the
enrichment records attached to them. Defaults on absence live here, per
field, rather than at each call site.

Models serialize with camelCase aliases (`model_dump(by_alias=True)`),
the shape the dashboard front end consumes.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

# =============================================================================
# CONSTANTS
# =============================================================================

UNKNOWN_ARTIST = "Unknown Artist"
"""Artist label used when a release carries no artist credit."""

DEFAULT_ALBUM_TYPE = "Album"
"""Release-group primary type assumed when MusicBrainz omits it."""


def absolute_url_or_none(value: str | None) -> str | None:
    """Normalize an image URL to a fully-qualified one.

    Protocol-relative URLs ("//host/path") gain an https scheme; anything
    that is not http(s) afterwards becomes None.

    Args:
        value: Raw URL from an upstream payload.

    Returns:
        Absolute URL or None.
    """
    if not value:
        return None
    value = value.strip()
    if value.startswith("//"):
        value = f"https:{value}"
    if value.startswith(("https://", "http://")):
        return value
    return None


class FeedModel(BaseModel):
    """Base model: immutable, camelCase aliases, extra fields ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


# =============================================================================
# ENRICHMENT RECORDS
# =============================================================================


class SteamReviewSummary(FeedModel):
    """Steam review totals from `query_summary`.

    Attributes:
        total_positive: Positive review count.
        total_negative: Negative review count.
        total_reviews: All reviews.
        review_score_desc: Steam's label ("Very Positive", ...).
    """

    total_positive: int = Field(default=0, ge=0)
    total_negative: int = Field(default=0, ge=0)
    total_reviews: int = Field(default=0, ge=0)
    review_score_desc: str = ""


class SteamDescription(FeedModel):
    """Steam store blurb for an app.

    Attributes:
        short_description: Store short description.
        header_image: Store header image URL.
    """

    short_description: str = ""
    header_image: str | None = None

    @field_validator("header_image")
    @classmethod
    def validate_header_image(cls, v: str | None) -> str | None:
        """Keep only absolute image URLs."""
        return absolute_url_or_none(v)


class ArtistInfo(FeedModel):
    """Artist popularity from Last.fm.

    Attributes:
        listeners: Listener count, None when unknown.
        genre: Top tag name, None when unknown.
    """

    listeners: int | None = Field(default=None, ge=0)
    genre: str | None = None

    @property
    def is_known(self) -> bool:
        """True when Last.fm returned anything for the artist."""
        return self.listeners is not None or self.genre is not None


# =============================================================================
# GAMES
# =============================================================================


class GameRelease(FeedModel):
    """A game released today, per IGDB.

    Attributes:
        id: IGDB game id.
        name: Game title.
        cover_url: Cover art URL.
        platforms: Platform names.
        steam_app_id: Steam app id (from IGDB or store search).
        website_url: Official or first listed website.
        release_date: ISO date of first release.
        hypes: IGDB pre-release follows.
        follows: IGDB follower count.
        steam_reviews: Review summary enrichment.
        steam_description: Store description enrichment.
    """

    id: int
    name: str
    cover_url: str | None = None
    platforms: list[str] = Field(default_factory=list)
    steam_app_id: str | None = None
    website_url: str | None = None
    release_date: str = ""
    hypes: int = Field(default=0, ge=0)
    follows: int = Field(default=0, ge=0)
    steam_reviews: SteamReviewSummary | None = None
    steam_description: SteamDescription | None = None

    @field_validator("cover_url", "website_url")
    @classmethod
    def validate_urls(cls, v: str | None) -> str | None:
        """Keep only absolute URLs."""
        return absolute_url_or_none(v)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def popularity(self) -> int:
        """Combined popularity score (hypes + follows)."""
        return self.hypes + self.follows


# =============================================================================
# MOVIES
# =============================================================================


class MovieRelease(FeedModel):
    """A theatrical release or now-playing title, per TMDB.

    Attributes:
        id: TMDB movie id.
        title: Movie title.
        poster_url: Poster image URL.
        release_date: ISO release date.
        director: Director name, None when credits are unavailable.
        director_id: TMDB person id of the director.
        cast: First billed cast names, None when credits are unavailable.
        overview: Plot synopsis.
        tmdb_url: Public TMDB page.
        friday_date: Release Friday this title was listed for.
        revenue: Box office revenue, None unless positive.
        popularity: TMDB popularity score.
        is_horror: Whether the title carries the horror genre.
    """

    id: int
    title: str
    poster_url: str | None = None
    release_date: str = ""
    director: str | None = None
    director_id: int | None = None
    cast: list[str] | None = None
    overview: str = ""
    tmdb_url: str = ""
    friday_date: str = ""
    revenue: int | None = None
    popularity: float = 0.0
    is_horror: bool = False

    @field_validator("poster_url")
    @classmethod
    def validate_poster_url(cls, v: str | None) -> str | None:
        """Keep only absolute image URLs."""
        return absolute_url_or_none(v)


class DirectorFilm(FeedModel):
    """A prior film directed by a person.

    Attributes:
        title: Film title.
        year: Release year ("" when unknown).
        poster_url: Small poster image URL.
    """

    title: str
    year: str = ""
    poster_url: str | None = None

    @field_validator("poster_url")
    @classmethod
    def validate_poster_url(cls, v: str | None) -> str | None:
        """Keep only absolute image URLs."""
        return absolute_url_or_none(v)


# =============================================================================
# MUSIC
# =============================================================================


class AlbumRelease(FeedModel):
    """An official album or EP released on the upcoming Friday.

    Attributes:
        id: MusicBrainz release id.
        title: Release title.
        artist: Comma-separated artist credit.
        cover_url: Cover Art Archive image URL.
        release_date: ISO release date.
        type: Release-group primary type (Album, EP).
        friday_date: Release Friday this album was listed for.
        artist_listeners: Last.fm listener count, None when unknown.
        genre: Last.fm top tag, None when unknown.
        in_library: Artist appears in the user's Spotify listening.
    """

    id: str
    title: str
    artist: str = UNKNOWN_ARTIST
    cover_url: str | None = None
    release_date: str = ""
    type: str = DEFAULT_ALBUM_TYPE
    friday_date: str = ""
    artist_listeners: int | None = None
    genre: str | None = None
    in_library: bool = False

    @field_validator("cover_url")
    @classmethod
    def validate_cover_url(cls, v: str | None) -> str | None:
        """Keep only absolute image URLs."""
        return absolute_url_or_none(v)


class ChartTrack(FeedModel):
    """A Last.fm chart track."""

    name: str
    artist: str
    listeners: int | None = None
    playcount: int | None = None
    url: str | None = None
    image_url: str | None = None

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v: str | None) -> str | None:
        """Keep only absolute image URLs."""
        return absolute_url_or_none(v)


class ChartArtist(FeedModel):
    """A Last.fm chart artist."""

    name: str
    listeners: int | None = None
    playcount: int | None = None
    url: str | None = None
    image_url: str | None = None

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v: str | None) -> str | None:
        """Keep only absolute image URLs."""
        return absolute_url_or_none(v)


class ChartAlbum(FeedModel):
    """A top album sampled from a genre tag chart.

    Attributes:
        name: Album name.
        artist: Artist name.
        genre: Genre tag the album was sampled from.
        rank: Position within its genre chart (1-based).
        image_url: Artwork URL (Last.fm, or iTunes backfill).
        release_date: ISO date from the iTunes backfill.
        url: Last.fm album page.
    """

    name: str
    artist: str
    genre: str
    rank: int = Field(ge=1)
    image_url: str | None = None
    release_date: str | None = None
    url: str | None = None

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v: str | None) -> str | None:
        """Keep only absolute image URLs."""
        return absolute_url_or_none(v)

    @property
    def identity(self) -> tuple[str, str]:
        """Case-insensitive (name, artist) key for uniqueness."""
        return self.name.casefold(), self.artist.casefold()


class TopChartsResponse(FeedModel):
    """Aggregated top charts payload.

    Attributes:
        tracks: Global top tracks.
        artists: Global top artists.
        albums: Genre-diversified top albums.
        fetched_at: When the payload was assembled (UTC).
    """

    tracks: list[ChartTrack] = Field(default_factory=list)
    artists: list[ChartArtist] = Field(default_factory=list)
    albums: list[ChartAlbum] = Field(default_factory=list)
    fetched_at: datetime


class ArtistPreview(FeedModel):
    """A 30-second preview of an artist's song."""

    track_name: str
    preview_url: str


# =============================================================================
# DASHBOARD WIDGETS
# =============================================================================


class BookSearchResult(FeedModel):
    """A book search hit from Open Library.

    Attributes:
        id: Work id (e.g. OL12345W).
        title: Book title.
        subtitle: First author name ("" when absent).
        image_url: Medium cover URL.
        release_date: First publish year ("" when absent).
    """

    id: str
    title: str = ""
    subtitle: str = ""
    image_url: str | None = None
    release_date: str = ""

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v: str | None) -> str | None:
        """Keep only absolute image URLs."""
        return absolute_url_or_none(v)


class WeatherReport(FeedModel):
    """Current conditions and today's range from Open-Meteo."""

    location: str
    temperature: float | None = None
    weather_code: int | None = None
    wind_speed: float | None = None
    high: float | None = None
    low: float | None = None
    observed_at: str = ""
