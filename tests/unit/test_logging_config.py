from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from tablewait.infrastructure.observability import logging_config
from tablewait.infrastructure.observability.logging_config import JsonFormatter, configure_logging


@pytest.fixture
def restore_root_logger(monkeypatch: pytest.MonkeyPatch):
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    monkeypatch.setattr(logging_config, "_LOGGING_CONFIGURED", False)
    yield root_logger
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="tablewait.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="hour_row_skipped",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_known_extra_fields() -> None:
    formatted = JsonFormatter().format(
        _record(restaurant_id="rst_1", day_of_week=9, unrelated="ignored")
    )

    payload = json.loads(formatted)
    assert payload["message"] == "hour_row_skipped"
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "tablewait.test"
    assert payload["restaurant_id"] == "rst_1"
    assert payload["day_of_week"] == 9
    assert payload["trace_id"] is None
    assert "unrelated" not in payload


def test_json_formatter_includes_exception() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = _record()
        record.exc_info = sys.exc_info()

    payload = json.loads(JsonFormatter().format(record))

    assert "RuntimeError: boom" in payload["exception"]


def test_configure_logging_installs_single_json_handler(restore_root_logger) -> None:
    configure_logging("debug")
    configure_logging("error")

    assert len(restore_root_logger.handlers) == 1
    assert isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)
    assert restore_root_logger.level == logging.DEBUG
