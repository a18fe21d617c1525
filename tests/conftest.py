from __future__ import annotations

from collections.abc import AsyncIterator, Iterator

import pytest
from httpx import ASGITransport, AsyncClient

from crew_dashboard.config import get_settings
from crew_dashboard.main import app
from crew_dashboard.observability.metrics import PerformanceMonitor, set_monitor
from crew_dashboard.services.completion import CompletionClient, set_completion_client
from crew_dashboard.services.seed import seed_sample_data
from crew_dashboard.services.storage import MemStorage, set_storage


class _Usage:
    def __init__(self, total_tokens: int) -> None:
        self.total_tokens = total_tokens


class _Message:
    def __init__(self, content: str | None) -> None:
        self.content = content


class _Choice:
    def __init__(self, content: str | None) -> None:
        self.message = _Message(content)


class _ChatResponse:
    def __init__(self, content: str | None, total_tokens: int) -> None:
        self.choices = [_Choice(content)]
        self.usage = _Usage(total_tokens)


class MockChatCompletionsApi:
    def __init__(self) -> None:
        self.calls: list[dict] = []
        self.fail_with: Exception | None = None

    def create(self, **kwargs) -> _ChatResponse:
        self.calls.append(kwargs)
        if self.fail_with is not None:
            raise self.fail_with
        user = kwargs["messages"][-1]["content"]
        return _ChatResponse(f"Mock result for: {user}", total_tokens=42)


class MockChatApi:
    def __init__(self) -> None:
        self.completions = MockChatCompletionsApi()


class MockCerebrasClient:
    def __init__(self) -> None:
        self.chat = MockChatApi()


@pytest.fixture
def sdk_client() -> MockCerebrasClient:
    return MockCerebrasClient()


@pytest.fixture
def monitor() -> PerformanceMonitor:
    return PerformanceMonitor(max_size=1000, uptime=lambda: 12.4)


@pytest.fixture
def storage() -> MemStorage:
    store = MemStorage()
    seed_sample_data(store)
    return store


@pytest.fixture(autouse=True)
def test_environment(
    monkeypatch: pytest.MonkeyPatch,
    sdk_client: MockCerebrasClient,
    monitor: PerformanceMonitor,
    storage: MemStorage,
) -> Iterator[None]:
    monkeypatch.setenv("CEREBRAS_API_KEY", "test-key")
    monkeypatch.setenv("APP_ENV", "test")
    get_settings.cache_clear()

    set_monitor(monitor)
    set_storage(storage)
    set_completion_client(CompletionClient(sdk_client=sdk_client))

    yield

    set_monitor(None)
    set_storage(None)
    set_completion_client(None)
    get_settings.cache_clear()


@pytest.fixture
async def api_client() -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
