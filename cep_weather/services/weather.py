from __future__ import annotations

import httpx
from pydantic import ValidationError

from cep_weather.models.schemas import WeatherRecord, WeatherResponse
from cep_weather.observability.metrics import InMemoryMetrics
from cep_weather.observability.providers import instrument_provider_call
from cep_weather.services.errors import WeatherUnavailableError

KELVIN_OFFSET = 273.15


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 1.8 + 32


def celsius_to_kelvin(celsius: float) -> float:
    return celsius + KELVIN_OFFSET


def build_weather_response(record: WeatherRecord, fallback_city: str = "") -> WeatherResponse:
    """Derive all three units from the single Celsius reading in `record`."""
    celsius = record.current.temp_c
    return WeatherResponse(
        city=record.location.name or fallback_city,
        temp_c=celsius,
        temp_f=celsius_to_fahrenheit(celsius),
        temp_k=celsius_to_kelvin(celsius),
    )


class WeatherClient:
    provider = "weatherapi"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str,
        api_key: str,
        metrics: InMemoryMetrics | None = None,
    ) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._metrics = metrics

    async def _get(self, city: str) -> httpx.Response:
        response = await self._http.get(
            f"{self._base_url}/current.json",
            params={"key": self._api_key, "q": city},
        )
        response.raise_for_status()
        return response

    async def current(self, city: str) -> WeatherRecord:
        try:
            response = await instrument_provider_call(
                provider=self.provider,
                operation="current",
                call=lambda: self._get(city),
                metrics=self._metrics,
            )
        except httpx.HTTPError as exc:
            # The key travels in the query string; keep it out of the message.
            raise WeatherUnavailableError(f"weather request failed for {city!r}: {type(exc).__name__}") from exc

        try:
            return WeatherRecord.model_validate_json(response.content)
        except ValidationError as exc:
            raise WeatherUnavailableError(f"weather provider returned an undecodable body for {city!r}") from exc
