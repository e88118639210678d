# src/taskview/connectors/text_render.py

from __future__ import annotations

from ..core.view import RenderMode, TaskView
from ..tasks.task_models import Task, TaskFilter

_FILTER_LABELS = {
    TaskFilter.ALL: "All Tasks",
    TaskFilter.COMPLETED: "Completed",
    TaskFilter.INCOMPLETE: "Incomplete",
}

SKELETON_ROWS = 3


def _filter_bar(active: TaskFilter) -> str:
    parts = []
    for f, label in _FILTER_LABELS.items():
        parts.append(f"[{label}]" if f == active else f" {label} ")
    return "  ".join(parts)


def render_task(task: Task) -> str:
    mark = "x" if task.completed else " "
    return f"[{mark}] #{task.id} {task.title}"


def render_view(view: TaskView, *, title: str = "Your tasks") -> str:
    """Plain-text rendering of a projected view, one block per render mode."""
    if view.mode == RenderMode.FULL_LOADING:
        return "Loading tasks..."

    if view.mode == RenderMode.ERROR:
        return f"{view.error}\nUse /retry to try again."

    lines = [title, _filter_bar(view.filter)]

    if view.mode == RenderMode.SKELETON:
        lines.extend("[ ] ..." for _ in range(SKELETON_ROWS))
        return "\n".join(lines)

    if not view.tasks:
        lines.append("(no tasks)")
    else:
        lines.extend(render_task(t) for t in view.tasks)
    return "\n".join(lines)
