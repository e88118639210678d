# src/taskview/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The sync controller depends on Protocols instead of concrete implementations.
This keeps the HTTP source and the storage backend swappable and makes testing easier.
"""

from typing import Awaitable, Protocol

from ..tasks.task_models import TaskCollection


class TaskSource(Protocol):
    """
    Remote task source.

    fetch_all() raises NetworkError on transport failure / non-2xx status and
    DecodeError on a malformed payload.
    """

    def fetch_all(self) -> Awaitable[TaskCollection]: ...


class TaskCache(Protocol):
    """
    Single-slot persisted task collection.

    read() returns None when nothing was ever written and raises CacheReadError
    on corruption; write() raises CacheWriteError on storage failure.
    """

    def read(self) -> Awaitable[TaskCollection | None]: ...
    def write(self, tasks: TaskCollection) -> Awaitable[None]: ...
