from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from cep_weather import __version__
from cep_weather.api.gateway import router as gateway_router
from cep_weather.api.health import router as health_router
from cep_weather.api.resolver import router as resolver_router
from cep_weather.config import Settings, get_settings
from cep_weather.observability.logging import configure_logging
from cep_weather.observability.metrics import InMemoryMetrics
from cep_weather.observability.middleware import RequestContextMiddleware
from cep_weather.services.directory import DirectoryClient
from cep_weather.services.resolver_client import ResolverClient
from cep_weather.services.weather import WeatherClient

GATEWAY_SERVICE = "gateway"
RESOLVER_SERVICE = "resolver"


def _build_http_client(settings: Settings, transport: httpx.AsyncBaseTransport | None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout_seconds),
        headers={"User-Agent": f"cep-weather/{__version__}"},
        transport=transport,
    )


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    try:
        yield
    finally:
        await app.state.http_client.aclose()


def _base_app(title: str, service: str, settings: Settings, transport: httpx.AsyncBaseTransport | None) -> FastAPI:
    configure_logging(settings.log_level_number)

    app = FastAPI(title=title, version=__version__, lifespan=_lifespan)
    metrics = InMemoryMetrics()
    app.state.service_name = service
    app.state.settings = settings
    app.state.metrics = metrics
    app.state.http_client = _build_http_client(settings, transport)
    app.add_middleware(RequestContextMiddleware, service=service, metrics=metrics)
    app.include_router(health_router)
    return app


def create_gateway_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Front gateway: validates the postal code and forwards it to the resolver.

    `transport` replaces the outbound network layer (tests wire it to a
    resolver app or a mock).
    """
    settings = settings or get_settings()
    app = _base_app("CEP Weather Gateway", GATEWAY_SERVICE, settings, transport)
    app.state.resolver_client = ResolverClient(app.state.http_client, settings.resolver_url, metrics=app.state.metrics)
    app.include_router(gateway_router)
    return app


def create_resolver_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Resolver: postal code -> city (ViaCEP) -> current temperature (WeatherAPI)."""
    settings = settings or get_settings()
    app = _base_app("CEP Weather Resolver", RESOLVER_SERVICE, settings, transport)
    app.state.directory_client = DirectoryClient(app.state.http_client, settings.viacep_url, metrics=app.state.metrics)
    app.state.weather_client = WeatherClient(
        app.state.http_client,
        settings.weather_api_url,
        settings.weather_api_key,
        metrics=app.state.metrics,
    )
    app.include_router(resolver_router)
    return app
