#!/usr/bin/env python3
"""Weather tool using Open-Meteo (no API key required).

CLI: uv run weather --location "New York, NY"
Tool: Registered as GetWeather for OpenAI function calling
"""

from pydantic import BaseModel, Field

from open_meteo import OpenMeteoClient, WeatherReading


class GetWeather(BaseModel):
    """Get current weather for a location."""

    location: str = Field(description="City name, 2-80 characters (e.g. 'Paris' or 'New York')")


async def get_weather(location_text: str, client: OpenMeteoClient | None = None) -> WeatherReading:
    """Current conditions for a free-text location.

    Raises the WeatherError subclass of the first failing step.
    """
    client = client or OpenMeteoClient()
    return await client.get_weather(location_text)


async def get_weather_handler(params: GetWeather) -> str:
    reading = await get_weather(params.location)
    return reading.model_dump_json(by_alias=True)


# ─── Dual Mode: CLI + Tool ─────────────────────────────────────────────────

def main() -> None:
    """CLI entry point."""
    from tools.base import run
    run(GetWeather, get_weather_handler)


if __name__ == "__main__":
    main()
else:
    from tools.base import tool
    tool(GetWeather)(get_weather_handler)
