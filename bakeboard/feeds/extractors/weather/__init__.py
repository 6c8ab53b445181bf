"""Weather extractor: Open-Meteo current conditions."""

from bakeboard.feeds.extractors.weather.client import WeatherClient

__all__ = ["WeatherClient"]
