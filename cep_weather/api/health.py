from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(request: Request) -> dict[str, str]:
    return {"status": "ok", "service": request.app.state.service_name}


@router.get("/metrics")
async def metrics(request: Request) -> dict:
    if not request.app.state.settings.enable_metrics_endpoint:
        raise HTTPException(status_code=404, detail="Not found")
    return request.app.state.metrics.snapshot()
