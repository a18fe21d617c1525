from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException

from crew_dashboard.config import get_settings
from crew_dashboard.observability.metrics import get_monitor

router = APIRouter(prefix="/api", tags=["metrics"])


def _ensure_enabled() -> None:
    if not get_settings().enable_metrics_endpoint:
        raise HTTPException(status_code=404, detail="Not found")


@router.get("/metrics")
async def metrics_stats() -> dict[str, Any]:
    _ensure_enabled()
    return get_monitor().stats()


@router.get("/metrics/raw")
async def metrics_raw() -> list[dict[str, Any]]:
    _ensure_enabled()
    return [observation.to_dict() for observation in get_monitor().snapshot()]


@router.post("/metrics/reset")
async def metrics_reset() -> dict[str, str]:
    _ensure_enabled()
    get_monitor().reset()
    return {"status": "reset"}
