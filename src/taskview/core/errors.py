# src/taskview/core/errors.py

"""
Error taxonomy shared by the adapters and the sync controller.

Adapters wrap library exceptions (httpx, sqlite3, json) into these types so the
controller can decide what is soft (cache) and what becomes the user-facing
error state (remote source).
"""

from __future__ import annotations


class TaskViewError(Exception):
    """Base class for all taskview errors."""


class TaskSourceError(TaskViewError):
    """Remote task source failed; any subclass maps to the generic error message."""


class NetworkError(TaskSourceError):
    """Transport failure, timeout or non-2xx status."""


class DecodeError(TaskSourceError):
    """Payload does not have the expected task collection shape."""


class CacheError(TaskViewError):
    pass


class CacheReadError(CacheError):
    """Stored collection is unreadable (storage failure or corrupted payload)."""


class CacheWriteError(CacheError):
    pass
