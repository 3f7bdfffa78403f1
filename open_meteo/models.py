"""Open-Meteo payloads and the readings built from them."""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, FiniteFloat
from pydantic.alias_generators import to_camel


# ─── Upstream Payloads ─────────────────────────────────────────────────────


class GeocodingResult(BaseModel):
    latitude: FiniteFloat
    longitude: FiniteFloat
    name: str
    country: str | None = None


class GeocodingResponse(BaseModel):
    # Open-Meteo omits "results" entirely when nothing matches
    results: list[GeocodingResult] | None = None


class CurrentConditions(BaseModel):
    time: str
    temperature_2m: FiniteFloat
    apparent_temperature: FiniteFloat
    relative_humidity_2m: FiniteFloat
    wind_speed_10m: FiniteFloat
    wind_gusts_10m: FiniteFloat | None = None
    weather_code: int


class ForecastResponse(BaseModel):
    current: CurrentConditions


# ─── Results ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class GeoPoint:
    """A resolved location."""

    latitude: float
    longitude: float
    canonical_name: str


class WeatherReading(BaseModel):
    """Current conditions at a resolved location.

    Serializes with camelCase keys (feelsLike, windGust, observedAt, ...)
    when dumped with by_alias=True.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    temperature: FiniteFloat
    feels_like: FiniteFloat
    humidity: FiniteFloat
    wind_speed: FiniteFloat
    wind_gust: FiniteFloat
    conditions: str
    location: str
    observed_at: str
