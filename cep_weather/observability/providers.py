from __future__ import annotations

from time import perf_counter
from typing import Awaitable, Callable, TypeVar

import structlog

from cep_weather.observability.metrics import InMemoryMetrics


T = TypeVar("T")


async def instrument_provider_call(
    *,
    provider: str,
    operation: str,
    call: Callable[[], Awaitable[T]],
    metrics: InMemoryMetrics | None = None,
) -> T:
    """Time an outbound call, update metrics, and emit a structured log event."""

    logger = structlog.get_logger("providers")
    start = perf_counter()
    try:
        result = await call()
    except Exception:
        elapsed_ms = (perf_counter() - start) * 1000.0
        if metrics is not None:
            metrics.observe_provider_call(provider, elapsed_ms=elapsed_ms, failed=True)
        logger.exception(
            "provider_call_failed",
            provider=provider,
            operation=operation,
            elapsed_ms=round(elapsed_ms, 2),
        )
        raise

    elapsed_ms = (perf_counter() - start) * 1000.0
    if metrics is not None:
        metrics.observe_provider_call(provider, elapsed_ms=elapsed_ms)
    logger.info(
        "provider_call",
        provider=provider,
        operation=operation,
        elapsed_ms=round(elapsed_ms, 2),
    )
    return result
