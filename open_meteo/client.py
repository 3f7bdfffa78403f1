"""Open-Meteo geocoding and current-conditions client."""

import asyncio
import logging
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from open_meteo.conditions import describe_weather_code
from open_meteo.models import (
    ForecastResponse,
    GeocodingResponse,
    GeoPoint,
    WeatherReading,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
REQUEST_TIMEOUT = 10.0

CURRENT_FIELDS = [
    "temperature_2m",
    "apparent_temperature",
    "relative_humidity_2m",
    "wind_speed_10m",
    "wind_gusts_10m",
    "weather_code",
]

MIN_LOCATION_LENGTH = 2
MAX_LOCATION_LENGTH = 80


# ─── Errors ────────────────────────────────────────────────────────────────


class WeatherError(Exception):
    """Weather lookup error."""

    pass


class InvalidLocationError(WeatherError):
    """Raised before any request when the location text is out of range."""

    def __init__(self, location: str) -> None:
        self.location = location
        super().__init__(
            f"Location must be {MIN_LOCATION_LENGTH}-{MAX_LOCATION_LENGTH} "
            f"characters, got {len(location.strip())}"
        )


class RequestTimeoutError(WeatherError):
    """Raised when a request exceeds the deadline."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Request to {url} timed out")


class HTTPStatusError(WeatherError):
    """Raised on a non-2xx response."""

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"HTTP {status_code} for {url}")


class NetworkError(WeatherError):
    """Raised on transport failures and unreadable response bodies."""

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        super().__init__(f"Network error for {url}: {message}")


class LocationNotFoundError(WeatherError):
    """Raised when geocoding returns no candidate."""

    def __init__(self, location: str) -> None:
        self.location = location
        super().__init__(f"Location '{location}' not found")


# ─── Helpers ───────────────────────────────────────────────────────────────


def normalize_location(text: str) -> str:
    """Trim and keep the first non-empty comma-separated part.

    "New York, NY" -> "New York". Not an address parser.
    """
    if not text:
        return text
    trimmed = text.strip()
    parts = [part.strip() for part in trimmed.split(",") if part.strip()]
    return parts[0] if parts else trimmed


def validate_location(text: str) -> str:
    """Return the trimmed location, raising InvalidLocationError if out of range."""
    trimmed = text.strip()
    if not MIN_LOCATION_LENGTH <= len(trimmed) <= MAX_LOCATION_LENGTH:
        raise InvalidLocationError(text)
    return trimmed


async def guarded_fetch(
    url: str,
    params: dict | None = None,
    *,
    timeout: float = REQUEST_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.Response:
    """GET a URL under a fixed deadline, translating failures to WeatherError.

    Raises:
        RequestTimeoutError: deadline exceeded (the request is cancelled)
        HTTPStatusError: non-2xx status
        NetworkError: any other transport failure
    """
    request_url = str(httpx.URL(url, params=params))
    logger.debug("GET %s", request_url)

    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await asyncio.wait_for(client.get(request_url), timeout)
    except (asyncio.TimeoutError, httpx.TimeoutException):
        logger.warning("Request to %s timed out after %ss", request_url, timeout)
        raise RequestTimeoutError(request_url) from None
    except httpx.HTTPError as e:
        logger.warning("Request to %s failed: %s", request_url, e)
        raise NetworkError(request_url, str(e) or type(e).__name__) from e

    if not response.is_success:
        logger.warning("Request to %s returned HTTP %d", request_url, response.status_code)
        raise HTTPStatusError(response.status_code, request_url)

    return response


def _parse(response: httpx.Response, model: type[M]) -> M:
    """Validate a JSON body against a payload model."""
    try:
        return model.model_validate_json(response.content)
    except ValidationError as e:
        raise NetworkError(str(response.url), f"unexpected response body: {e.error_count()} invalid field(s)") from e


# ─── Client ────────────────────────────────────────────────────────────────


class OpenMeteoClient:
    """Resolves place names and fetches current conditions from Open-Meteo.

    Holds no per-request state; every call opens its own HTTP connection.
    """

    def __init__(
        self,
        timeout: float = REQUEST_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.timeout = timeout
        self._transport = transport

    async def _get(self, url: str, params: dict) -> httpx.Response:
        return await guarded_fetch(url, params, timeout=self.timeout, transport=self._transport)

    async def resolve(self, raw_location: str) -> GeoPoint:
        """Resolve free text to coordinates and a display name."""
        response = await self._get(
            GEOCODING_URL,
            {"name": normalize_location(raw_location), "count": 1},
        )
        data = _parse(response, GeocodingResponse)

        if not data.results:
            raise LocationNotFoundError(raw_location)

        top = data.results[0]
        name = f"{top.name}, {top.country}" if top.country else top.name
        logger.debug("Resolved %r to %s (%s, %s)", raw_location, name, top.latitude, top.longitude)
        return GeoPoint(latitude=top.latitude, longitude=top.longitude, canonical_name=name)

    async def fetch_conditions(self, point: GeoPoint) -> WeatherReading:
        """Fetch current conditions at a resolved point."""
        response = await self._get(
            FORECAST_URL,
            {
                "latitude": point.latitude,
                "longitude": point.longitude,
                "current": ",".join(CURRENT_FIELDS),
                "timezone": "auto",
            },
        )
        current = _parse(response, ForecastResponse).current

        wind_gust = current.wind_gusts_10m
        if wind_gust is None:
            wind_gust = current.wind_speed_10m

        return WeatherReading(
            temperature=current.temperature_2m,
            feels_like=current.apparent_temperature,
            humidity=current.relative_humidity_2m,
            wind_speed=current.wind_speed_10m,
            wind_gust=wind_gust,
            conditions=describe_weather_code(current.weather_code),
            location=point.canonical_name,
            observed_at=current.time,
        )

    async def get_weather(self, location_text: str) -> WeatherReading:
        """Validate, resolve, then fetch. The first failure propagates as-is."""
        validate_location(location_text)
        point = await self.resolve(location_text)
        return await self.fetch_conditions(point)
