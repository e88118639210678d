# src/taskview/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs the console viewer until /exit.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state, shutdown
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _run(settings) -> None:
    state = create_initial_state(settings=settings)
    try:
        await run_console_loop(state)
    finally:
        await shutdown(state)


def main() -> None:
    settings = get_settings()

    log_dir = getattr(settings, "data_dir", ".local/taskview")
    log_file = setup_logging(log_dir=log_dir, console_level=getattr(settings, "log_level", "INFO"))

    logger.info("Starting %s (log file: %s)...", getattr(settings, "app_name", "taskview"), log_file)

    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")
    finally:
        logger.info("Bye.")


if __name__ == "__main__":
    main()
