# src/taskview/core/view.py

from __future__ import annotations

"""
View state projector.

Pure functions from SyncState to what the front-end should draw. Nothing here
is stored: the filtered list is re-derived on every call.
"""

from dataclasses import dataclass
from enum import Enum

from ..tasks.task_models import TaskCollection, TaskFilter
from .state import SyncState


class RenderMode(str, Enum):
    FULL_LOADING = "full_loading"
    ERROR = "error"
    SKELETON = "skeleton"
    LIST = "list"


@dataclass(slots=True, frozen=True)
class TaskView:
    mode: RenderMode
    tasks: TaskCollection
    error: str | None
    filter: TaskFilter


def filter_tasks(tasks: TaskCollection, task_filter: TaskFilter) -> TaskCollection:
    if task_filter == TaskFilter.COMPLETED:
        return tuple(t for t in tasks if t.completed)
    if task_filter == TaskFilter.INCOMPLETE:
        return tuple(t for t in tasks if not t.completed)
    return tasks


def project_view(state: SyncState) -> TaskView:
    """
    Precedence:
    - first blocking load -> FULL_LOADING
    - last fetch failed  -> ERROR (front-end offers retry = refresh)
    - refresh in flight  -> SKELETON
    - otherwise          -> LIST of the filtered tasks
    """
    if state.loading and not state.refreshing:
        mode = RenderMode.FULL_LOADING
    elif state.error is not None:
        mode = RenderMode.ERROR
    elif state.loading and state.refreshing:
        mode = RenderMode.SKELETON
    else:
        mode = RenderMode.LIST

    visible = filter_tasks(state.tasks, state.filter) if mode == RenderMode.LIST else ()
    return TaskView(mode=mode, tasks=visible, error=state.error, filter=state.filter)
