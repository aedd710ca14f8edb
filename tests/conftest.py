from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from cep_weather.config import get_settings
from cep_weather.main import create_gateway_app, create_resolver_app
from tests.fakes import RESOLVER_HOST, VIACEP_HOST, WEATHER_HOST, FakeProviders


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VIACEP_URL", f"http://{VIACEP_HOST}/ws")
    monkeypatch.setenv("WEATHER_API_URL", f"http://{WEATHER_HOST}/v1")
    monkeypatch.setenv("WEATHER_API_KEY", "test-key")
    monkeypatch.setenv("RESOLVER_URL", f"http://{RESOLVER_HOST}")
    get_settings.cache_clear()

    yield

    get_settings.cache_clear()


@pytest.fixture
def providers() -> FakeProviders:
    return FakeProviders()


@pytest.fixture
async def provider_http(providers: FakeProviders) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(transport=httpx.MockTransport(providers.handler)) as client:
        yield client


@pytest.fixture
async def resolver_app(providers: FakeProviders) -> AsyncIterator[FastAPI]:
    app = create_resolver_app(transport=httpx.MockTransport(providers.handler))
    yield app
    await app.state.http_client.aclose()


@pytest.fixture
async def gateway_app(resolver_app: FastAPI) -> AsyncIterator[FastAPI]:
    app = create_gateway_app(transport=ASGITransport(app=resolver_app))
    yield app
    await app.state.http_client.aclose()


@pytest.fixture
async def resolver_client(resolver_app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=resolver_app), base_url="http://resolver") as client:
        yield client


@pytest.fixture
async def gateway_client(gateway_app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=gateway_app), base_url="http://gateway") as client:
        yield client
