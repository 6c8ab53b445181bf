"""Weather (Open-Meteo) configuration settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WeatherSettings(BaseSettings):
    """Open-Meteo forecast configuration.

    Attributes:
        forecast_url: Forecast endpoint.
        latitude: Dashboard location latitude.
        longitude: Dashboard location longitude.
        location_name: Label shown with the report.
    """

    forecast_url: str = Field(
        default="https://api.open-meteo.com/v1/forecast",
        alias="WEATHER_FORECAST_URL",
    )
    latitude: float = Field(default=44.6488, ge=-90, le=90, alias="WEATHER_LATITUDE")
    longitude: float = Field(default=-63.5752, ge=-180, le=180, alias="WEATHER_LONGITUDE")
    location_name: str = Field(default="Halifax", alias="WEATHER_LOCATION_NAME")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
