from __future__ import annotations

from cep_weather.models.schemas import WeatherResponse
from cep_weather.services.directory import DirectoryClient
from cep_weather.services.weather import WeatherClient, build_weather_response


async def resolve_weather(postal_code: str, directory: DirectoryClient, weather: WeatherClient) -> WeatherResponse:
    """Postal code -> locality -> current weather, strictly in that order.

    Errors from either provider propagate unchanged; the caller maps them to
    HTTP responses.
    """
    locality = await directory.lookup(postal_code)
    record = await weather.current(locality.city)
    return build_weather_response(record, fallback_city=locality.city)
