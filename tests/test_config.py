import logging

import httpx

from cep_weather.config import Settings, get_settings
from cep_weather.main import create_gateway_app, create_resolver_app


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "7.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    get_settings.cache_clear()
    settings = get_settings()
    assert settings.request_timeout_seconds == 7.5
    assert settings.log_level_number == logging.DEBUG
    assert settings.resolver_url == "http://resolver.test"


def test_unknown_log_level_falls_back_to_info(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    assert Settings().log_level_number == logging.INFO


def test_defaults(monkeypatch) -> None:
    for name in ("RESOLVER_URL", "VIACEP_URL", "WEATHER_API_URL", "WEATHER_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.request_timeout_seconds == 5.0
    assert settings.gateway_port == 8080
    assert settings.resolver_port == 8081
    assert settings.viacep_url == "https://viacep.com.br/ws"


async def test_request_timeout_reaches_outbound_clients(monkeypatch) -> None:
    monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "2.5")
    get_settings.cache_clear()

    for app in (create_gateway_app(), create_resolver_app()):
        timeout = app.state.http_client.timeout
        await app.state.http_client.aclose()
        assert timeout == httpx.Timeout(2.5)
        assert timeout.read == 2.5
        assert timeout.connect == 2.5
