import httpx
import pytest

from cep_weather.models.schemas import WeatherCurrent, WeatherLocation, WeatherRecord
from cep_weather.observability.metrics import InMemoryMetrics
from cep_weather.services.errors import WeatherUnavailableError
from cep_weather.services.weather import WeatherClient, build_weather_response

from tests.fakes import WEATHER_HOST, FakeProviders


def _record(name: str, celsius: float) -> WeatherRecord:
    return WeatherRecord(location=WeatherLocation(name=name), current=WeatherCurrent(temp_c=celsius))


@pytest.mark.parametrize("celsius", [-40.0, -12.3, 0.0, 18.7, 25.0, 36.6, 100.0])
def test_conversions_derive_from_same_celsius_sample(celsius: float) -> None:
    response = build_weather_response(_record("Curitiba", celsius))
    assert response.temp_c == celsius
    assert response.temp_f == celsius * 1.8 + 32
    assert response.temp_k == celsius + 273.15


def test_known_values() -> None:
    response = build_weather_response(_record("São Paulo", 25.0))
    assert response.city == "São Paulo"
    assert response.temp_f == pytest.approx(77.0)
    assert response.temp_k == pytest.approx(298.15)


def test_falls_back_to_directory_city_when_location_name_missing() -> None:
    response = build_weather_response(_record("", 20.0), fallback_city="Recife")
    assert response.city == "Recife"


def test_response_serializes_with_unit_suffix_keys() -> None:
    dumped = build_weather_response(_record("Natal", 30.0)).model_dump(by_alias=True)
    assert set(dumped) == {"city", "temp_C", "temp_F", "temp_K"}


def _client(http: httpx.AsyncClient, metrics: InMemoryMetrics | None = None) -> WeatherClient:
    return WeatherClient(http, f"http://{WEATHER_HOST}/v1", "secret-key", metrics=metrics)


async def test_current_sends_city_and_key(providers: FakeProviders, provider_http: httpx.AsyncClient) -> None:
    record = await _client(provider_http).current("São Paulo")
    assert record.current.temp_c == 25.0
    sent = providers.requests[0]
    assert sent.url.path == "/v1/current.json"
    assert sent.url.params["q"] == "São Paulo"
    assert sent.url.params["key"] == "secret-key"


async def test_unknown_city_raises(providers: FakeProviders, provider_http: httpx.AsyncClient) -> None:
    with pytest.raises(WeatherUnavailableError) as exc_info:
        await _client(provider_http).current("Atlantis")
    assert "secret-key" not in str(exc_info.value)


async def test_transport_failure_raises_and_counts(providers: FakeProviders, provider_http: httpx.AsyncClient) -> None:
    providers.fail_with = httpx.ConnectError
    metrics = InMemoryMetrics()
    with pytest.raises(WeatherUnavailableError):
        await _client(provider_http, metrics).current("São Paulo")
    snapshot = metrics.snapshot()
    assert snapshot["providers"]["weatherapi"]["failures_total"] == 1


async def test_undecodable_body_raises(providers: FakeProviders, provider_http: httpx.AsyncClient) -> None:
    providers.weather_raw = b"<html>oops</html>"
    with pytest.raises(WeatherUnavailableError):
        await _client(provider_http).current("São Paulo")


async def test_missing_temperature_raises(providers: FakeProviders, provider_http: httpx.AsyncClient) -> None:
    providers.weather_raw = b'{"location": {"name": "X"}, "current": {}}'
    with pytest.raises(WeatherUnavailableError):
        await _client(provider_http).current("São Paulo")
