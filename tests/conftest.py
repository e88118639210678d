# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskview.core.state import AppState
from taskview.core.sync import SyncController

from .fakes import FakeTaskCache, FakeTaskSource


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the commands.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskview-test",
        api_url="https://tasks.example.test/todos",
        data_dir=tmp_path,
        cache_db_path=tmp_path / "cache.sqlite3",
        cache_key="tasks",
    )


@pytest.fixture()
def cache() -> FakeTaskCache:
    return FakeTaskCache()


@pytest.fixture()
def source() -> FakeTaskSource:
    return FakeTaskSource()


@pytest.fixture()
def state(settings: SimpleNamespace, source: FakeTaskSource, cache: FakeTaskCache) -> AppState:
    """AppState wired with deterministic fakes."""
    return AppState(
        settings=settings,
        controller=SyncController(source, cache),
        source=source,
        cache=cache,
    )
