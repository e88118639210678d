# src/taskview/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

APP_LOGGER = "taskview"
LOG_FILE_NAME = "taskview.log"

# Chatty libraries: httpx logs every request at INFO.
QUIET_LOGGERS = ("httpx", "httpcore")
QUIET_LEVEL = logging.WARNING


def parse_level(name: object, default: int = logging.INFO) -> int:
    """Map a level name like "debug" or "WARNING" (or a number) to a logging level."""
    if isinstance(name, int):
        return name
    level = logging.getLevelName(str(name or "").strip().upper())
    return level if isinstance(level, int) else default


class _ConsoleNoiseFilter(logging.Filter):
    """
    The console shares the terminal with the task list, so only our own records
    pass at any level. HTTP client loggers pass from WARNING, everything else
    (including captured py.warnings) only from ERROR.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name == APP_LOGGER or name.startswith(APP_LOGGER + "."):
            return True
        if name.split(".", 1)[0] in QUIET_LOGGERS:
            return record.levelno >= QUIET_LEVEL
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskview",
    console_level: int | str = logging.INFO,
    file_level: int | str = logging.DEBUG,
) -> Path:
    """
    Route logs to stderr (filtered) and to <log_dir>/taskview.log (everything at file_level).

    Replaces existing root handlers, so calling it again does not duplicate output.
    Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)-7s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(parse_level(console_level))
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(parse_level(file_level, logging.DEBUG))
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(QUIET_LEVEL)

    logging.captureWarnings(True)
    return log_file
