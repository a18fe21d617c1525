from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from crew_dashboard.observability.health import health_check

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, Any]:
    return health_check()


@router.get("/api/health")
async def api_health() -> dict[str, Any]:
    return health_check()
