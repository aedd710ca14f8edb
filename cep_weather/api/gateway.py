from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError

from cep_weather.api.responses import http_error
from cep_weather.models.schemas import PostalCodeRequest
from cep_weather.services.errors import ForwardingError
from cep_weather.services.postal_code import is_valid_postal_code
from cep_weather.services.resolver_client import ForwardResult, ResolverClient

router = APIRouter(tags=["gateway"])

# Bodies relayed for non-200 resolver answers; the status code is echoed as is.
_RELAYED_ERRORS = {
    422: "Invalid ZIP code",
    404: "ZIP code not found",
}


def get_resolver_client(request: Request) -> ResolverClient:
    return request.app.state.resolver_client


def relay_response(result: ForwardResult) -> Response:
    if result.status_code == 200 and result.payload is not None:
        return JSONResponse(result.payload.model_dump(by_alias=True), status_code=200)
    message = _RELAYED_ERRORS.get(result.status_code, "Internal Server Error")
    return PlainTextResponse(message, status_code=result.status_code)


@router.post("/weather")
async def weather(request: Request, resolver: ResolverClient = Depends(get_resolver_client)) -> Response:
    body = await request.body()
    try:
        payload = PostalCodeRequest.from_body(body)
    except ValidationError as exc:
        return http_error(422, "Invalid ZIP code", exc)

    if not is_valid_postal_code(payload.cep):
        return http_error(422, "Invalid ZIP code")

    try:
        result = await resolver.forward(body, request_id=getattr(request.state, "request_id", None))
    except ForwardingError as exc:
        # Every forwarding failure, network errors included, surfaces as this one message.
        return http_error(422, "invalid zipcode", exc)

    return relay_response(result)
