"""Process memory and uptime probes backed by psutil."""

from __future__ import annotations

import time
from dataclasses import dataclass

import psutil


_BYTES_PER_MB = 1024 * 1024


@dataclass(frozen=True)
class MemorySnapshot:
    """Process memory counters in bytes.

    Field names follow the dashboard's wire format. ``heap_total`` is the
    virtual memory size, ``heap_used`` the data segment where the platform
    reports one (RSS otherwise), ``external`` the shared memory size where
    reported (0 otherwise).
    """

    rss: int
    heap_used: int
    heap_total: int
    external: int

    def to_dict(self) -> dict[str, int]:
        return {
            "rss": self.rss,
            "heapUsed": self.heap_used,
            "heapTotal": self.heap_total,
            "external": self.external,
        }

    def to_megabytes(self) -> dict[str, float]:
        return {key: bytes_to_mb(value) for key, value in self.to_dict().items()}


EMPTY_MEMORY = MemorySnapshot(rss=0, heap_used=0, heap_total=0, external=0)

_process: psutil.Process | None = None
_started_at: float | None = None


def _current_process() -> psutil.Process:
    global _process
    if _process is None:
        _process = psutil.Process()
    return _process


def _process_start_monotonic() -> float:
    # Anchored once to the monotonic clock so wall-clock jumps cannot move uptime backwards.
    global _started_at
    if _started_at is None:
        age = max(0.0, time.time() - _current_process().create_time())
        _started_at = time.monotonic() - age
    return _started_at


def bytes_to_mb(value: int | float) -> float:
    return round(value / _BYTES_PER_MB, 2)


def memory_usage() -> MemorySnapshot:
    info = _current_process().memory_info()
    return MemorySnapshot(
        rss=int(info.rss),
        heap_used=int(getattr(info, "data", info.rss)),
        heap_total=int(info.vms),
        external=int(getattr(info, "shared", 0)),
    )


def uptime_seconds() -> float:
    """Seconds since the process started, never negative."""

    return max(0.0, time.monotonic() - _process_start_monotonic())
