# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from taskview.logging_setup import _ConsoleNoiseFilter, parse_level, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_keeps_own_logs_and_quiets_http_client() -> None:
    f = _ConsoleNoiseFilter()

    assert f.filter(_record("taskview.core.sync", logging.DEBUG))
    assert not f.filter(_record("taskviewer", logging.WARNING))
    assert not f.filter(_record("httpx", logging.INFO))
    assert f.filter(_record("httpx", logging.WARNING))
    assert f.filter(_record("httpcore.connection", logging.WARNING))
    assert not f.filter(_record("py.warnings", logging.WARNING))
    assert not f.filter(_record("asyncio", logging.WARNING))
    assert f.filter(_record("asyncio", logging.ERROR))


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("debug", logging.DEBUG),
        (" Warning ", logging.WARNING),
        ("ERROR", logging.ERROR),
        (logging.CRITICAL, logging.CRITICAL),
        ("", logging.INFO),
        (None, logging.INFO),
        ("loud", logging.INFO),
    ],
)
def test_parse_level(raw, expected: int) -> None:
    assert parse_level(raw) == expected


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    quiet = {name: logging.getLogger(name).level for name in ("httpx", "httpcore")}
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in saved_handlers:
        root.addHandler(h)
    root.setLevel(saved_level)
    for name, level in quiet.items():
        logging.getLogger(name).setLevel(level)
    logging.captureWarnings(False)


def test_setup_logging_writes_log_file(tmp_path: Path, restore_root_logging) -> None:
    log_file = setup_logging(log_dir=tmp_path / "logs", console_level="warning")
    logging.getLogger("taskview.test").info("hello file")
    for h in logging.getLogger().handlers:
        h.flush()

    assert log_file == tmp_path / "logs" / "taskview.log"
    assert "hello file" in log_file.read_text("utf-8")


def test_setup_logging_quiets_http_loggers_and_does_not_stack_handlers(
    tmp_path: Path, restore_root_logging
) -> None:
    setup_logging(log_dir=tmp_path)
    setup_logging(log_dir=tmp_path)

    assert len(logging.getLogger().handlers) == 2
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING
