from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from cep_weather.api.responses import http_error
from cep_weather.models.schemas import PostalCodeRequest
from cep_weather.services.directory import DirectoryClient
from cep_weather.services.errors import DirectoryUnavailableError, LocalityNotFoundError, WeatherUnavailableError
from cep_weather.services.postal_code import is_valid_postal_code
from cep_weather.services.resolver_service import resolve_weather
from cep_weather.services.weather import WeatherClient

router = APIRouter(tags=["resolver"])


def get_directory_client(request: Request) -> DirectoryClient:
    return request.app.state.directory_client


def get_weather_client(request: Request) -> WeatherClient:
    return request.app.state.weather_client


@router.post("/weather")
async def weather(
    request: Request,
    directory: DirectoryClient = Depends(get_directory_client),
    weather_client: WeatherClient = Depends(get_weather_client),
) -> Response:
    body = await request.body()
    try:
        payload = PostalCodeRequest.from_body(body)
    except ValidationError as exc:
        return http_error(400, "Failed to unmarshal request body", exc)

    if not is_valid_postal_code(payload.cep):
        return http_error(422, "Invalid ZIP code")

    try:
        result = await resolve_weather(payload.cep, directory, weather_client)
    except LocalityNotFoundError as exc:
        return http_error(404, "Cannot find ZIP code", exc)
    except DirectoryUnavailableError as exc:
        return http_error(500, "Failed to resolve locality", exc)
    except WeatherUnavailableError as exc:
        return http_error(500, "Failed to fetch weather", exc)

    return JSONResponse(result.model_dump(by_alias=True), status_code=200)
