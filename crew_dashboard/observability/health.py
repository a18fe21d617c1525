from __future__ import annotations

import platform
from datetime import datetime, timezone
from typing import Any

import structlog

from crew_dashboard.config import get_settings
from crew_dashboard.observability.process import EMPTY_MEMORY, bytes_to_mb, memory_usage, uptime_seconds


def _format_mb(value: int) -> str:
    mb = bytes_to_mb(value)
    # "50 MB" rather than "50.0 MB"; fractions keep at most two decimals.
    return f"{int(mb) if mb.is_integer() else mb} MB"


def health_check() -> dict[str, Any]:
    """Liveness report: process uptime, memory and runtime. No dependency probing."""

    try:
        memory = memory_usage()
    except Exception:
        structlog.get_logger("health").exception("memory_probe_failed")
        memory = EMPTY_MEMORY

    try:
        uptime = round(uptime_seconds())
    except Exception:
        structlog.get_logger("health").exception("uptime_probe_failed")
        uptime = 0

    return {
        "status": "healthy",
        "uptime": uptime,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "memory": {
            "rss": _format_mb(memory.rss),
            "heapUsed": _format_mb(memory.heap_used),
            "heapTotal": _format_mb(memory.heap_total),
        },
        "env": get_settings().app_env,
        "version": f"Python {platform.python_version()}",
    }
