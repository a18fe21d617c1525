import pytest

from crew_dashboard.observability.metrics import Observation, PerformanceMonitor, get_monitor, nearest_rank, reset_metrics
from crew_dashboard.observability.process import MemorySnapshot


def make_memory(rss: int = 50 * 1024 * 1024) -> MemorySnapshot:
    return MemorySnapshot(rss=rss, heap_used=20 * 1024 * 1024, heap_total=40 * 1024 * 1024, external=1024 * 1024)


def _obs(response_time_ms: float, status_code: int = 200, path: str = "/api/agents") -> Observation:
    return Observation(
        method="GET",
        path=path,
        status_code=status_code,
        response_time_ms=response_time_ms,
        memory=make_memory(),
    )


def test_stats_on_empty_buffer_returns_no_metrics_message(monitor) -> None:
    assert monitor.stats() == {"message": "No metrics available"}


def test_stats_scenario_with_slow_outlier(monitor) -> None:
    for ms in [10, 20, 30, 100, 5000]:
        monitor.record(_obs(ms))

    stats = monitor.stats()
    assert stats["totalRequests"] == 5
    assert stats["responseTime"]["avg"] == 1032
    assert stats["responseTime"]["min"] == 10
    assert stats["responseTime"]["max"] == 5000
    assert stats["statusCodes"] == {200: 5}
    assert stats["uptime"] == 12


def test_stats_min_matches_smallest_recorded_value(monitor) -> None:
    for ms in [10, 20, 30, 100, 5000, 5]:
        monitor.record(_obs(ms))

    stats = monitor.stats()
    assert stats["responseTime"]["min"] == 5
    assert stats["responseTime"]["max"] == 5000


def test_ring_buffer_keeps_last_entries_in_order() -> None:
    monitor = PerformanceMonitor(max_size=2, uptime=lambda: 0.0)
    a, b, c = _obs(1, path="/a"), _obs(2, path="/b"), _obs(3, path="/c")
    for observation in (a, b, c):
        monitor.record(observation)

    assert monitor.snapshot() == (b, c)


def test_buffer_never_exceeds_capacity() -> None:
    monitor = PerformanceMonitor(max_size=50, uptime=lambda: 0.0)
    recorded = [_obs(float(i)) for i in range(120)]
    for observation in recorded:
        monitor.record(observation)

    snapshot = monitor.snapshot()
    assert len(snapshot) == 50
    assert list(snapshot) == recorded[-50:]
    assert monitor.stats()["totalRequests"] == len(monitor)


def test_snapshot_is_a_copy(monitor) -> None:
    monitor.record(_obs(1))
    snapshot = monitor.snapshot()
    monitor.record(_obs(2))

    assert len(snapshot) == 1
    assert len(monitor.snapshot()) == 2


def test_min_max_bound_every_recorded_value(monitor) -> None:
    values = [3.5, 0.0, 12.25, 7.75, 999.99, 41.0]
    for ms in values:
        monitor.record(_obs(ms))

    stats = monitor.stats()["responseTime"]
    assert all(stats["min"] <= v <= stats["max"] for v in values)


def test_percentiles_are_monotonic(monitor) -> None:
    values = [float((i * 37) % 211) for i in range(300)]
    for ms in values:
        monitor.record(_obs(ms))

    stats = monitor.stats()["responseTime"]
    median = nearest_rank(sorted(values), 0.5)
    assert stats["p99"] >= stats["p95"] >= median


def test_percentiles_use_nearest_rank_without_interpolation(monitor) -> None:
    for ms in range(1, 101):
        monitor.record(_obs(float(ms)))

    stats = monitor.stats()["responseTime"]
    # floor(100 * 0.95) = 95 -> 96th smallest value
    assert stats["p95"] == 96
    assert stats["p99"] == 100


def test_percentile_index_is_clamped_for_single_value(monitor) -> None:
    monitor.record(_obs(42.0))

    stats = monitor.stats()["responseTime"]
    assert stats["p95"] == 42.0
    assert stats["p99"] == 42.0


def test_status_codes_are_counted(monitor) -> None:
    for code in [200, 200, 404, 500, 201]:
        monitor.record(_obs(1, status_code=code))

    assert monitor.stats()["statusCodes"] == {200: 2, 404: 1, 500: 1, 201: 1}


def test_memory_reflects_latest_observation_in_megabytes(monitor) -> None:
    monitor.record(_obs(1))
    monitor.record(
        Observation(
            method="GET",
            path="/x",
            status_code=200,
            response_time_ms=1,
            memory=make_memory(rss=128 * 1024 * 1024 + 512 * 1024),
        )
    )

    memory = monitor.stats()["memory"]
    assert memory == {"rss": 128.5, "heapUsed": 20.0, "heapTotal": 40.0, "external": 1.0}


def test_reset_empties_buffer(monitor) -> None:
    monitor.record(_obs(1))
    monitor.reset()

    assert monitor.snapshot() == ()
    assert monitor.stats() == {"message": "No metrics available"}


def test_reset_metrics_clears_process_monitor(monitor) -> None:
    monitor.record(_obs(1))
    assert get_monitor() is monitor

    reset_metrics()
    assert len(monitor) == 0


def test_zero_capacity_is_rejected() -> None:
    with pytest.raises(ValueError):
        PerformanceMonitor(max_size=0)


def test_observation_serializes_with_camel_case_keys() -> None:
    payload = _obs(12.5, status_code=201).to_dict()

    assert payload["statusCode"] == 201
    assert payload["responseTime"] == 12.5
    assert set(payload["memoryUsage"]) == {"rss", "heapUsed", "heapTotal", "external"}
    assert "T" in payload["timestamp"]
