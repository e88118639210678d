# src/taskview/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from ..tasks.task_models import TaskCollection, TaskFilter

if TYPE_CHECKING:
    from ..tasks.task_cache import SqliteTaskCache
    from ..tasks.task_remote import HttpTaskSource
    from .ports import TaskCache, TaskSource
    from .sync import SyncController

GENERIC_LOAD_ERROR = "Failed to load tasks. Please try again later."


class SyncPhase(StrEnum):
    """
    Single tagged state instead of independent loading/refreshing/error flags.

    INITIAL_LOADING -> blocking fetch, nothing shown yet
    REFRESHING      -> explicit refresh in flight
    ERROR           -> most recent fetch failed
    READY           -> tasks available, nothing in flight
    """

    INITIAL_LOADING = "initial_loading"
    REFRESHING = "refreshing"
    ERROR = "error"
    READY = "ready"


@dataclass(frozen=True, slots=True)
class SyncState:
    """
    Whole application state. Never mutated in place: every operation builds a
    new value with dataclasses.replace, so readers never see a partial update.
    """

    tasks: TaskCollection = ()
    phase: SyncPhase = SyncPhase.INITIAL_LOADING
    error: str | None = None
    filter: TaskFilter = TaskFilter.ALL

    @classmethod
    def initial(cls) -> SyncState:
        return cls()

    @property
    def loading(self) -> bool:
        return self.phase in (SyncPhase.INITIAL_LOADING, SyncPhase.REFRESHING)

    @property
    def refreshing(self) -> bool:
        return self.phase == SyncPhase.REFRESHING


@dataclass
class AppState:
    """Everything the front-end needs, wired once by cli.bootstrap."""

    # Settings object (or a SimpleNamespace in tests).
    settings: object

    controller: SyncController
    source: HttpTaskSource | TaskSource
    cache: SqliteTaskCache | TaskCache
