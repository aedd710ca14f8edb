from __future__ import annotations

import uuid
from time import perf_counter
from typing import Any, Callable

import structlog
from starlette.datastructures import Headers, MutableHeaders

from cep_weather.observability.metrics import InMemoryMetrics

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware:
    """Adds request_id context, access logs, and basic HTTP metrics."""

    def __init__(self, app: Callable[..., Any], service: str, metrics: InMemoryMetrics) -> None:
        self.app = app
        self.service = service
        self.metrics = metrics
        # Avoid self-observing the observability endpoints.
        self._excluded_metric_paths = {"/metrics", "/health"}

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        # Reuse the caller's id so gateway and resolver log lines correlate.
        request_id = Headers(scope=scope).get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        scope.setdefault("state", {})["request_id"] = request_id
        path = scope.get("path")
        method = scope.get("method")

        start = perf_counter()
        status_code: int = 500

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal status_code

            if message.get("type") == "http.response.start":
                status_code = int(message.get("status", 500))
                headers = MutableHeaders(scope=message)
                headers[REQUEST_ID_HEADER] = request_id

            await send(message)

        with structlog.contextvars.bound_contextvars(
            request_id=request_id,
            service=self.service,
            path=path,
            method=method,
        ):
            try:
                await self.app(scope, receive, send_wrapper)
            finally:
                elapsed_ms = (perf_counter() - start) * 1000.0

                if path not in self._excluded_metric_paths:
                    self.metrics.observe_http_request(elapsed_ms=elapsed_ms, status_code=status_code)

                structlog.get_logger("access").info(
                    "http_request",
                    status_code=status_code,
                    elapsed_ms=round(elapsed_ms, 2),
                )
