from __future__ import annotations

from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from cep_weather.models.schemas import WeatherResponse
from cep_weather.observability.metrics import InMemoryMetrics
from cep_weather.observability.middleware import REQUEST_ID_HEADER
from cep_weather.observability.providers import instrument_provider_call
from cep_weather.services.errors import ForwardingError


@dataclass(frozen=True)
class ForwardResult:
    status_code: int
    payload: WeatherResponse | None = None


class ResolverClient:
    """Gateway-side client that relays the caller's body to the resolver."""

    provider = "resolver"

    def __init__(self, http_client: httpx.AsyncClient, base_url: str, metrics: InMemoryMetrics | None = None) -> None:
        self._http = http_client
        self._url = f"{base_url.rstrip('/')}/weather"
        self._metrics = metrics

    async def forward(self, body: bytes, request_id: str | None = None) -> ForwardResult:
        headers = {"Content-Type": "application/json"}
        if request_id:
            headers[REQUEST_ID_HEADER] = request_id

        try:
            response = await instrument_provider_call(
                provider=self.provider,
                operation="forward",
                call=lambda: self._http.post(self._url, content=body, headers=headers),
                metrics=self._metrics,
            )
        except httpx.HTTPError as exc:
            raise ForwardingError(f"resolver request failed: {exc!r}") from exc

        if response.status_code != 200:
            # Error bodies are plain text; only the status is relayed.
            return ForwardResult(status_code=response.status_code)

        try:
            payload = WeatherResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise ForwardingError("resolver returned an undecodable body") from exc
        return ForwardResult(status_code=200, payload=payload)
