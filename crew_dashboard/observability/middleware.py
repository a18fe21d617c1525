from __future__ import annotations

import uuid
from time import perf_counter
from typing import Any, Callable, Iterable

import structlog
from starlette.datastructures import MutableHeaders

from crew_dashboard.observability.metrics import Observation, PerformanceMonitor, get_monitor
from crew_dashboard.observability.process import MemorySnapshot, memory_usage


SLOW_REQUEST_MS = 1000.0
EXCLUDED_PATH_PREFIXES = ("/api/metrics",)


class PerformanceMiddleware:
    """Times every HTTP request and records it once the response is flushed.

    Also binds request_id/method/path into structlog contextvars, sets the
    ``X-Request-ID`` response header and writes one access log line.
    Recording never fails the request: bookkeeping errors are logged only.
    """

    def __init__(
        self,
        app: Callable[..., Any],
        monitor: PerformanceMonitor | None = None,
        slow_request_ms: float = SLOW_REQUEST_MS,
        excluded_path_prefixes: Iterable[str] = EXCLUDED_PATH_PREFIXES,
        memory_probe: Callable[[], MemorySnapshot] = memory_usage,
    ) -> None:
        self.app = app
        # None means "whatever get_monitor() returns at request time".
        self._monitor = monitor
        self._slow_request_ms = float(slow_request_ms)
        self._excluded_prefixes = tuple(excluded_path_prefixes)
        self._memory_probe = memory_probe

    @property
    def monitor(self) -> PerformanceMonitor:
        return self._monitor if self._monitor is not None else get_monitor()

    def _is_excluded(self, path: str) -> bool:
        return any(path == prefix or path.startswith(prefix + "/") for prefix in self._excluded_prefixes)

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        start = perf_counter()
        request_id = str(uuid.uuid4())
        method = str(scope.get("method", ""))
        path = str(scope.get("path", ""))

        structlog.contextvars.bind_contextvars(request_id=request_id, method=method, path=path)

        status_code: int = 500
        completed = False

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal status_code, completed

            message_type = message.get("type")
            if message_type == "http.response.start":
                status_code = int(message.get("status", 500))
                headers = MutableHeaders(scope=message)
                headers["X-Request-ID"] = request_id

            # The caller gets the message first and unchanged; bookkeeping runs after.
            await send(message)

            if message_type == "http.response.body" and not message.get("more_body", False) and not completed:
                completed = True
                self._observe(method, path, status_code, start)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            # The outer error middleware answers with a 500 through the raw send.
            if not completed:
                completed = True
                status_code = 500
                self._observe(method, path, status_code, start)
            raise
        finally:
            structlog.get_logger("access").info(
                "http_request",
                status_code=status_code,
                elapsed_ms=round((perf_counter() - start) * 1000.0, 2),
                completed=completed,
            )
            structlog.contextvars.clear_contextvars()

    def _observe(self, method: str, path: str, status_code: int, start: float) -> None:
        try:
            elapsed_ms = round(max(0.0, (perf_counter() - start) * 1000.0), 2)

            if not self._is_excluded(path):
                self.monitor.record(
                    Observation(
                        method=method,
                        path=path,
                        status_code=status_code,
                        response_time_ms=elapsed_ms,
                        memory=self._memory_probe(),
                    )
                )

            if elapsed_ms > self._slow_request_ms:
                structlog.get_logger("performance").warning(
                    "slow_request",
                    method=method,
                    path=path,
                    elapsed_ms=elapsed_ms,
                )
        except Exception:
            structlog.get_logger("performance").exception(
                "metrics_record_failed",
                method=method,
                path=path,
            )
