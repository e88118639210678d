# src/taskview/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from ..core.errors import DecodeError


class TaskFilter(StrEnum):
    """Which tasks the list view shows. Purely a view concern, never persisted."""

    ALL = "all"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"

    @classmethod
    def parse(cls, raw: str | None) -> TaskFilter:
        """Lenient parse used by the console (`/filter done`, `/filter todo`, ...)."""
        s = (raw or "").strip().lower()
        if not s:
            return cls.ALL
        aliases = {
            "done": cls.COMPLETED,
            "complete": cls.COMPLETED,
            "todo": cls.INCOMPLETE,
            "open": cls.INCOMPLETE,
        }
        if s in aliases:
            return aliases[s]
        return cls(s)


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    title: str
    completed: bool


TaskCollection = tuple[Task, ...]


def task_from_dict(raw: Any) -> Task:
    """
    Strict decode of one task object.

    Unknown keys (e.g. "userId") are ignored; missing or mistyped known keys fail.
    """
    if not isinstance(raw, dict):
        raise DecodeError(f"Task must be an object, got {type(raw).__name__}")

    task_id = raw.get("id")
    title = raw.get("title")
    completed = raw.get("completed")

    # bool is a subclass of int; an id of true/false is a schema mismatch.
    if not isinstance(task_id, int) or isinstance(task_id, bool):
        raise DecodeError(f"Task id must be an integer, got {task_id!r}")
    if not isinstance(title, str):
        raise DecodeError(f"Task {task_id} title must be a string")
    if not isinstance(completed, bool):
        raise DecodeError(f"Task {task_id} completed must be a boolean")

    return Task(id=task_id, title=title, completed=completed)


def tasks_from_payload(data: Any) -> TaskCollection:
    if not isinstance(data, list):
        raise DecodeError(f"Task payload must be a JSON array, got {type(data).__name__}")
    return tuple(task_from_dict(item) for item in data)


def task_to_dict(task: Task) -> dict[str, Any]:
    return {"id": task.id, "title": task.title, "completed": task.completed}


def tasks_to_payload(tasks: TaskCollection) -> list[dict[str, Any]]:
    return [task_to_dict(t) for t in tasks]
