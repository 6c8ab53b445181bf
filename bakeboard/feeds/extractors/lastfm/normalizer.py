"""Parse Last.fm web service payloads."""

from typing import Any

from bakeboard.feeds.aggregation.schemas import ArtistInfo, ChartAlbum, ChartArtist, ChartTrack

PLACEHOLDER_IMAGE_HASH = "2a96cbd8b46e442fc41c2b86b821562f"
"""Last.fm's grey star image, served when no artwork exists."""

IMAGE_SIZES = ("mega", "extralarge", "large", "medium", "small")


def parse_count(value: Any) -> int | None:
    """Parse Last.fm's stringified counters."""
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def is_placeholder_image(url: str | None) -> bool:
    """True when the URL is missing or Last.fm's placeholder."""
    return not url or PLACEHOLDER_IMAGE_HASH in url


def pick_image(images: list[dict[str, Any]] | None) -> str | None:
    """Pick the largest real image from a Last.fm `image` array."""
    by_size = {img.get("size"): img.get("#text") for img in images or []}
    for size in IMAGE_SIZES:
        url = by_size.get(size)
        if not is_placeholder_image(url):
            return url
    return None


def _as_list(value: Any) -> list[dict[str, Any]]:
    """Last.fm returns a bare object instead of a one-element list."""
    if isinstance(value, list):
        return value
    if isinstance(value, dict):
        return [value]
    return []


def parse_artist_info(payload: Any) -> ArtistInfo:
    """Parse `artist.getinfo` into listeners and top tag."""
    if not isinstance(payload, dict):
        return ArtistInfo()
    artist = payload.get("artist") or {}
    stats = artist.get("stats") or {}
    tags = _as_list((artist.get("tags") or {}).get("tag"))
    return ArtistInfo(
        listeners=parse_count(stats.get("listeners")),
        genre=tags[0].get("name") if tags else None,
    )


def parse_top_tracks(payload: dict[str, Any]) -> list[ChartTrack]:
    """Parse `chart.gettoptracks`."""
    tracks = _as_list((payload.get("tracks") or {}).get("track"))
    return [
        ChartTrack(
            name=track.get("name") or "",
            artist=(track.get("artist") or {}).get("name") or "",
            listeners=parse_count(track.get("listeners")),
            playcount=parse_count(track.get("playcount")),
            url=track.get("url"),
            image_url=pick_image(track.get("image")),
        )
        for track in tracks
        if track.get("name")
    ]


def parse_top_artists(payload: dict[str, Any]) -> list[ChartArtist]:
    """Parse `chart.gettopartists`."""
    artists = _as_list((payload.get("artists") or {}).get("artist"))
    return [
        ChartArtist(
            name=artist.get("name") or "",
            listeners=parse_count(artist.get("listeners")),
            playcount=parse_count(artist.get("playcount")),
            url=artist.get("url"),
            image_url=pick_image(artist.get("image")),
        )
        for artist in artists
        if artist.get("name")
    ]


def parse_tag_albums(tag: str, payload: dict[str, Any]) -> list[ChartAlbum]:
    """Parse `tag.gettopalbums`, ranking albums in payload order."""
    albums = [
        album
        for album in _as_list((payload.get("albums") or {}).get("album"))
        if album.get("name")
    ]
    return [
        ChartAlbum(
            name=album["name"],
            artist=(album.get("artist") or {}).get("name") or "",
            genre=tag,
            rank=index,
            image_url=pick_image(album.get("image")),
            url=album.get("url"),
        )
        for index, album in enumerate(albums, start=1)
    ]
