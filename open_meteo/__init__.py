"""Open-Meteo integration module."""

from open_meteo.client import (
    HTTPStatusError,
    InvalidLocationError,
    LocationNotFoundError,
    NetworkError,
    OpenMeteoClient,
    RequestTimeoutError,
    WeatherError,
    guarded_fetch,
    normalize_location,
)
from open_meteo.conditions import describe_weather_code
from open_meteo.models import GeoPoint, WeatherReading

__all__ = [
    "OpenMeteoClient",
    "GeoPoint",
    "WeatherReading",
    "WeatherError",
    "InvalidLocationError",
    "RequestTimeoutError",
    "HTTPStatusError",
    "NetworkError",
    "LocationNotFoundError",
    "guarded_fetch",
    "normalize_location",
    "describe_weather_code",
]
