from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from cep_weather.models.schemas import DirectoryRecord
from cep_weather.observability.metrics import InMemoryMetrics
from cep_weather.observability.providers import instrument_provider_call
from cep_weather.services.errors import DirectoryUnavailableError, LocalityNotFoundError
from cep_weather.services.postal_code import normalize_postal_code

logger = logging.getLogger(__name__)


class DirectoryClient:
    """Resolves a postal code to its locality through ViaCEP."""

    provider = "viacep"

    def __init__(self, http_client: httpx.AsyncClient, base_url: str, metrics: InMemoryMetrics | None = None) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._metrics = metrics

    async def _get(self, url: str) -> httpx.Response:
        response = await self._http.get(url)
        response.raise_for_status()
        return response

    async def lookup(self, postal_code: str) -> DirectoryRecord:
        """Fetch the directory record for `postal_code`.

        Raises LocalityNotFoundError when ViaCEP answers with its not-found
        marker, DirectoryUnavailableError for transport, status, or decode failures.
        """
        url = f"{self._base_url}/{normalize_postal_code(postal_code)}/json/"
        try:
            response = await instrument_provider_call(
                provider=self.provider,
                operation="lookup",
                call=lambda: self._get(url),
                metrics=self._metrics,
            )
        except httpx.HTTPError as exc:
            raise DirectoryUnavailableError(f"directory request failed: {exc}") from exc

        try:
            record = DirectoryRecord.model_validate_json(response.content)
        except ValidationError as exc:
            raise DirectoryUnavailableError("directory returned an undecodable body") from exc

        if record.is_not_found:
            raise LocalityNotFoundError(f"no locality for postal code {postal_code}")

        logger.info("directory.resolved", extra={"postal_code": postal_code, "city": record.city, "uf": record.uf})
        return record
