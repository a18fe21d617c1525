import logging
from collections.abc import Iterator

import pytest
import structlog

from crew_dashboard.config import get_settings
from crew_dashboard.observability import logging as logging_module
from crew_dashboard.observability.logging import CAPTURED_LOGGERS, configure_logging


@pytest.fixture(autouse=True)
def restore_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setattr(logging_module, "_CONFIGURED", False)
    touched = [logging.getLogger(), *(logging.getLogger(name) for name in CAPTURED_LOGGERS)]
    saved = [(logger, logger.handlers[:], logger.level, logger.propagate) for logger in touched]

    yield

    for logger, handlers, level, propagate in saved:
        logger.handlers = handlers
        logger.setLevel(level)
        logger.propagate = propagate
    structlog.reset_defaults()


def test_level_name_is_resolved_case_insensitively() -> None:
    assert configure_logging(" debug ") == logging.DEBUG
    assert logging.getLogger().level == logging.DEBUG


def test_level_defaults_to_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    get_settings.cache_clear()

    assert configure_logging() == logging.WARNING


def test_unknown_level_name_falls_back_to_info() -> None:
    assert configure_logging("chatty") == logging.INFO


def test_uvicorn_loggers_share_the_root_handler() -> None:
    configure_logging("info")

    (root_handler,) = logging.getLogger().handlers
    for name in CAPTURED_LOGGERS:
        logger = logging.getLogger(name)
        assert logger.handlers == [root_handler]
        assert logger.propagate is False


def test_repeated_calls_keep_first_configuration() -> None:
    configure_logging("error")
    assert configure_logging("debug") == logging.ERROR
    assert configure_logging("debug", force=True) == logging.DEBUG
