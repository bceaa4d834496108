"""Tests for `petcompare/logging_config.py`."""

import logging
from collections.abc import Iterator

import pytest
import structlog

from petcompare.config import LoggingConfig
from petcompare.logging_config import configure_logging


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    root_level = logging.getLogger().level
    yield
    structlog.reset_defaults()
    logging.getLogger().setLevel(root_level)


def test_json_renderer_by_default() -> None:
    configure_logging()

    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], structlog.processors.JSONRenderer)
    assert structlog.stdlib.add_log_level in processors
    assert logging.getLogger().level == logging.INFO


def test_console_renderer_and_level() -> None:
    configure_logging(LoggingConfig(level="DEBUG", format="console"))

    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
    assert logging.getLogger().level == logging.DEBUG


def test_events_go_through_stdlib(caplog: pytest.LogCaptureFixture) -> None:
    configure_logging(LoggingConfig(level="INFO", format="json"))

    with caplog.at_level(logging.INFO):
        structlog.get_logger("petcompare.test").info("pet_comparison_started", pet_count=2)

    assert '"event": "pet_comparison_started"' in caplog.text
    assert '"pet_count": 2' in caplog.text
