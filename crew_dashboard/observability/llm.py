from __future__ import annotations

from time import perf_counter
from typing import Any, Callable, TypeVar

import structlog


T = TypeVar("T")


def extract_total_tokens(resp: Any) -> int | None:
    usage = getattr(resp, "usage", None)
    if usage is None and isinstance(resp, dict):
        usage = resp.get("usage")
    if usage is None:
        return None

    # SDK usage objects are pydantic models; raw payloads are dicts.
    total = getattr(usage, "total_tokens", None)
    if isinstance(total, int):
        return total

    if isinstance(usage, dict):
        total = usage.get("total_tokens")
        if isinstance(total, int):
            return total

    return None


def instrument_completion_call(*, operation: str, model: str, fn: Callable[[], T]) -> T:
    """Time a completion API call and emit a structured log event for it."""

    logger = structlog.get_logger("completion")
    start = perf_counter()
    try:
        resp = fn()
    except Exception:
        logger.exception(
            "completion_call_failed",
            operation=operation,
            model=model,
            elapsed_ms=round((perf_counter() - start) * 1000.0, 2),
        )
        raise

    logger.info(
        "completion_call",
        operation=operation,
        model=model,
        elapsed_ms=round((perf_counter() - start) * 1000.0, 2),
        tokens_total=extract_total_tokens(resp),
    )
    return resp
