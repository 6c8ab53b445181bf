"""Data source settings.

Exports configuration classes for every upstream feed source:
- IGDB / Twitch and Steam (games)
- TMDB (movies)
- MusicBrainz, Last.fm, Spotify, iTunes (music)
- Open Library (books), Open-Meteo (weather)
"""

from bakeboard.settings.sources.igdb import IGDBSettings
from bakeboard.settings.sources.itunes import ITunesSettings
from bakeboard.settings.sources.lastfm import LastFMSettings
from bakeboard.settings.sources.musicbrainz import MusicBrainzSettings
from bakeboard.settings.sources.openlibrary import OpenLibrarySettings
from bakeboard.settings.sources.spotify import SpotifySettings
from bakeboard.settings.sources.steam import SteamSettings
from bakeboard.settings.sources.tmdb import TMDBSettings
from bakeboard.settings.sources.weather import WeatherSettings

__all__ = [
    "IGDBSettings",
    "SteamSettings",
    "TMDBSettings",
    "MusicBrainzSettings",
    "LastFMSettings",
    "SpotifySettings",
    "ITunesSettings",
    "OpenLibrarySettings",
    "WeatherSettings",
]
