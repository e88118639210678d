# src/taskview/connectors/console_connector.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import sys
import threading
from datetime import datetime
from typing import TextIO

from ..cli.commands import registry as command_registry
from ..core.state import AppState, SyncState
from .text_render import render_view

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


def _log_transition(new_state: SyncState) -> None:
    logger.debug(
        "state phase=%s tasks=%d filter=%s error=%s",
        new_state.phase.value,
        len(new_state.tasks),
        new_state.filter.value,
        new_state.error,
    )


class _LineReader:
    """
    Feeds lines from a blocking stream into the event loop.

    The reader thread is a daemon, so a pending readline() never keeps the
    process alive after the loop is cancelled (Ctrl+C).
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._queue: asyncio.Queue[str | None] | None = None
        self._thread: threading.Thread | None = None

    def _start(self) -> asyncio.Queue[str | None]:
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue[str | None] = asyncio.Queue()

        def pump() -> None:
            try:
                for line in iter(self._stream.readline, ""):
                    loop.call_soon_threadsafe(queue.put_nowait, line.rstrip("\r\n"))
            except (OSError, ValueError) as e:
                logger.debug("stdin reader stopped: %s", e)
            # Loop may already be closed at shutdown.
            with contextlib.suppress(RuntimeError):
                loop.call_soon_threadsafe(queue.put_nowait, None)

        self._queue = queue
        self._thread = threading.Thread(target=pump, name="stdin-reader", daemon=True)
        self._thread.start()
        return queue

    async def readline(self) -> str:
        queue = self._queue or self._start()
        line = await queue.get()
        if line is None:
            # EOF stays EOF for later reads.
            queue.put_nowait(None)
            raise EOFError
        return line


_stdin_reader: _LineReader | None = None


async def _read_line(prompt: str) -> str:
    global _stdin_reader
    if _stdin_reader is None:
        _stdin_reader = _LineReader(sys.stdin)
    print(prompt, end="", flush=True)
    return await _stdin_reader.readline()


async def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    controller = state.controller
    unsubscribe = controller.subscribe(_log_transition)

    try:
        _print_ts(render_view(controller.view()))
        await controller.load_initial()
        _print_ts(render_view(controller.view()))
        _print_ts("[CONSOLE] Use /help for commands. Use /exit to quit.\n")

        while True:
            try:
                user_input = (await _read_line(">>> ")).strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except asyncio.CancelledError:
                logger.info("Console cancelled, exiting.")
                raise

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            if not user_input.startswith("/"):
                _print_ts("Commands start with '/'. Use /help to list them.")
                continue

            try:
                response = await command_registry.handle(state, user_input, emit=_print_ts)
            except Exception:
                logger.exception("Command handler crashed.")
                response = "Internal error while handling a command."

            if response is not None:
                _print_ts(response)
    finally:
        unsubscribe()
        logger.info("Console connector finished.")
