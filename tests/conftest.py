"""Pytest configuration - load .env before tests, shared fakes."""

import httpx
import pytest
from dotenv import load_dotenv

import session_store
from open_meteo import OpenMeteoClient

# Load .env file for API keys
load_dotenv()

GEOCODING_HOST = "geocoding-api.open-meteo.com"
FORECAST_HOST = "api.open-meteo.com"


def geocoding_payload(**overrides) -> dict:
    result = {"latitude": 48.85341, "longitude": 2.3488, "name": "Paris", "country": "France"}
    result.update(overrides)
    return {"results": [result]}


def forecast_payload(**overrides) -> dict:
    current = {
        "time": "2024-05-01T14:15",
        "interval": 900,
        "temperature_2m": 18.4,
        "apparent_temperature": 17.1,
        "relative_humidity_2m": 62,
        "wind_speed_10m": 11.2,
        "wind_gusts_10m": 24.5,
        "weather_code": 2,
    }
    current.update(overrides)
    return {"latitude": 48.86, "longitude": 2.34, "timezone": "Europe/Paris", "current": current}


def _respond(status: int, body: dict | bytes) -> httpx.Response:
    if isinstance(body, bytes):
        return httpx.Response(status, content=body)
    return httpx.Response(status, json=body)


class FakeOpenMeteo:
    """Stands in for both Open-Meteo hosts and records every request."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        # (status, body): a dict body is sent as JSON, bytes as-is
        self.geocoding: tuple[int, dict | bytes] = (200, geocoding_payload())
        self.forecast: tuple[int, dict | bytes] = (200, forecast_payload())

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == GEOCODING_HOST:
            return _respond(*self.geocoding)
        if request.url.host == FORECAST_HOST:
            return _respond(*self.forecast)
        return httpx.Response(404)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def fake_api() -> FakeOpenMeteo:
    return FakeOpenMeteo()


@pytest.fixture
def weather_client(fake_api: FakeOpenMeteo) -> OpenMeteoClient:
    return OpenMeteoClient(transport=fake_api.transport())


@pytest.fixture(autouse=True)
def session_db(tmp_path, monkeypatch):
    """Keep session memory out of the real data directory."""
    path = tmp_path / "sessions.db"
    monkeypatch.setattr(session_store, "DB_PATH", path)
    return path
