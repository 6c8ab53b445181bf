"""Open-Meteo current weather client."""

from typing import Any

from bakeboard.feeds.aggregation.schemas import WeatherReport
from bakeboard.feeds.http import FetchClient, SourceClientError


def _first(values: list[Any] | None) -> Any:
    return values[0] if values else None


class WeatherClient:
    """HTTP client for the Open-Meteo forecast endpoint."""

    def __init__(
        self,
        fetcher: FetchClient,
        forecast_url: str,
        latitude: float,
        longitude: float,
        location_name: str,
    ) -> None:
        self._fetcher = fetcher
        self._forecast_url = forecast_url
        self._latitude = latitude
        self._longitude = longitude
        self._location_name = location_name

    async def fetch_current(self) -> WeatherReport:
        """Current conditions plus today's high and low.

        Raises:
            SourceClientError: When the forecast call fails.
        """
        payload = await self._fetcher.get_json(
            self._forecast_url,
            params={
                "latitude": self._latitude,
                "longitude": self._longitude,
                "current": "temperature_2m,weather_code,wind_speed_10m",
                "daily": "temperature_2m_max,temperature_2m_min",
                "forecast_days": 1,
                "timezone": "auto",
            },
        )
        if not isinstance(payload, dict):
            raise SourceClientError("Unexpected Open-Meteo payload", source="weather")

        current = payload.get("current") or {}
        daily = payload.get("daily") or {}
        return WeatherReport(
            location=self._location_name,
            temperature=current.get("temperature_2m"),
            weather_code=current.get("weather_code"),
            wind_speed=current.get("wind_speed_10m"),
            high=_first(daily.get("temperature_2m_max")),
            low=_first(daily.get("temperature_2m_min")),
            observed_at=current.get("time") or "",
        )
