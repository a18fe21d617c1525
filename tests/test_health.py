from datetime import datetime

from crew_dashboard.observability import health as health_module
from crew_dashboard.observability.health import health_check
from crew_dashboard.observability.process import MemorySnapshot


def test_health_check_shape() -> None:
    report = health_check()

    assert report["status"] == "healthy"
    assert isinstance(report["uptime"], int)
    assert report["uptime"] >= 0
    assert datetime.fromisoformat(report["timestamp"]).tzinfo is not None
    assert set(report["memory"]) == {"rss", "heapUsed", "heapTotal"}
    assert all(value.endswith(" MB") for value in report["memory"].values())
    assert report["version"].startswith("Python ")


def test_health_uptime_is_non_decreasing() -> None:
    first = health_check()["uptime"]
    second = health_check()["uptime"]
    assert second >= first


def test_health_check_survives_probe_failures(monkeypatch) -> None:
    def _boom():
        raise RuntimeError("probe failed")

    monkeypatch.setattr(health_module, "memory_usage", _boom)
    monkeypatch.setattr(health_module, "uptime_seconds", _boom)

    report = health_check()
    assert report["status"] == "healthy"
    assert report["uptime"] == 0
    assert report["memory"] == {"rss": "0 MB", "heapUsed": "0 MB", "heapTotal": "0 MB"}


def test_health_env_comes_from_settings(monkeypatch) -> None:
    from crew_dashboard.config import get_settings

    monkeypatch.setenv("APP_ENV", "production")
    get_settings.cache_clear()

    assert health_check()["env"] == "production"


def test_health_memory_strings_drop_trailing_zero_fraction(monkeypatch) -> None:
    snapshot = MemorySnapshot(rss=50 * 1024 * 1024, heap_used=12 * 1024 * 1024 + 256 * 1024, heap_total=0, external=0)
    monkeypatch.setattr(health_module, "memory_usage", lambda: snapshot)

    assert health_check()["memory"] == {"rss": "50 MB", "heapUsed": "12.25 MB", "heapTotal": "0 MB"}
