# src/taskview/core/mutations.py

from __future__ import annotations

from dataclasses import replace

from .state import SyncState


def toggle_complete(state: SyncState, task_id: int) -> SyncState:
    """
    Flip `completed` on the task with `task_id`, in memory only.

    Other Task objects are kept as-is. An unknown id returns `state` itself.
    The change is lost on the next successful fetch (last-fetch-wins).
    """
    found = False
    new_tasks = []
    for task in state.tasks:
        if task.id == task_id:
            new_tasks.append(replace(task, completed=not task.completed))
            found = True
        else:
            new_tasks.append(task)

    if not found:
        return state
    return replace(state, tasks=tuple(new_tasks))
