# src/taskview/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the HTTP source, the SQLite cache and the sync controller into AppState,
- tears them down again.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..core.sync import SyncController
from ..tasks.task_cache import SqliteTaskCache
from ..tasks.task_remote import HttpTaskSource

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.cache_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    source = HttpTaskSource(
        settings.api_url,
        connect_timeout_s=settings.connect_timeout_seconds,
        read_timeout_s=settings.read_timeout_seconds,
    )
    cache = SqliteTaskCache(settings.cache_db_path, key=settings.cache_key)

    logger.debug("Wired source=%s cache=%s key=%s", source.url, settings.cache_db_path, settings.cache_key)
    return AppState(
        settings=settings,
        controller=SyncController(source, cache),
        source=source,
        cache=cache,
    )


async def shutdown(state: AppState) -> None:
    """Best-effort teardown (no exceptions should escape)."""
    state.controller.close()

    aclose = getattr(state.source, "aclose", None)
    if aclose is None:
        return
    try:
        await aclose()
    except Exception:
        logger.debug("Task source close failed.", exc_info=True)
