from __future__ import annotations

import math
from collections import Counter, deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Callable

from crew_dashboard.config import get_settings
from crew_dashboard.observability.process import MemorySnapshot, uptime_seconds


DEFAULT_BUFFER_SIZE = 1000

NO_METRICS: dict[str, str] = {"message": "No metrics available"}


@dataclass(frozen=True)
class Observation:
    """One completed HTTP request."""

    method: str
    path: str
    status_code: int
    response_time_ms: float
    memory: MemorySnapshot
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "method": self.method,
            "path": self.path,
            "statusCode": self.status_code,
            "responseTime": self.response_time_ms,
            "memoryUsage": self.memory.to_dict(),
        }


def nearest_rank(sorted_values: list[float], fraction: float) -> float:
    """Value at ``floor(len * fraction)`` of an ascending list, no interpolation."""

    index = min(int(math.floor(len(sorted_values) * fraction)), len(sorted_values) - 1)
    return sorted_values[index]


class PerformanceMonitor:
    """Bounded, process-local log of request observations (resets on restart).

    Oldest observations are evicted first once ``max_size`` is reached. All
    public methods take the lock, so each sees a consistent buffer.
    """

    def __init__(self, max_size: int = DEFAULT_BUFFER_SIZE, uptime: Callable[[], float] = uptime_seconds) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self._lock = Lock()
        self._observations: deque[Observation] = deque(maxlen=max_size)
        self._uptime = uptime

    @property
    def max_size(self) -> int:
        return self._observations.maxlen or 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._observations)

    def record(self, observation: Observation) -> None:
        with self._lock:
            self._observations.append(observation)

    def snapshot(self) -> tuple[Observation, ...]:
        with self._lock:
            return tuple(self._observations)

    def stats(self) -> dict[str, Any]:
        with self._lock:
            observations = list(self._observations)

        if not observations:
            return dict(NO_METRICS)

        response_times = sorted(o.response_time_ms for o in observations)
        status_codes = Counter(o.status_code for o in observations)
        average = sum(response_times) / len(response_times)

        return {
            "totalRequests": len(observations),
            "responseTime": {
                "avg": round(average, 2),
                "min": round(response_times[0], 2),
                "max": round(response_times[-1], 2),
                "p95": round(nearest_rank(response_times, 0.95), 2),
                "p99": round(nearest_rank(response_times, 0.99), 2),
            },
            "statusCodes": dict(status_codes),
            "memory": observations[-1].memory.to_megabytes(),
            "uptime": round(self._uptime()),
        }

    def reset(self) -> None:
        with self._lock:
            self._observations.clear()


_MONITOR: PerformanceMonitor | None = None


def get_monitor() -> PerformanceMonitor:
    global _MONITOR
    if _MONITOR is None:
        _MONITOR = PerformanceMonitor(max_size=get_settings().metrics_buffer_size)
    return _MONITOR


def set_monitor(monitor: PerformanceMonitor | None) -> None:
    global _MONITOR
    _MONITOR = monitor


def reset_metrics() -> None:
    """Drop every recorded observation (used by tests and the reset endpoint)."""

    get_monitor().reset()
