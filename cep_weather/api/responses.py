from __future__ import annotations

import structlog
from fastapi.responses import PlainTextResponse


def http_error(status_code: int, message: str, exc: BaseException | None = None) -> PlainTextResponse:
    """Log the underlying cause and answer with a short plain-text message."""

    logger = structlog.get_logger("http")
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "request_failed",
        status_code=status_code,
        message=message,
        error=repr(exc) if exc is not None else None,
    )
    return PlainTextResponse(message, status_code=status_code)
