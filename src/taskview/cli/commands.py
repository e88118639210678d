# src/taskview/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable

from ..connectors.text_render import render_view
from ..core.errors import CacheError
from ..core.state import AppState
from ..tasks.task_models import TaskFilter

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[
    [AppState, list[str], CommandEmitter | None], str | Awaitable[str]
]

logger = logging.getLogger(__name__)

LIST_TITLE = "Your tasks"


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /refresh, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command. Handlers may be sync or async.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        result = handler(state, args, emit)
        if inspect.isawaitable(result):
            result = await result
        return result

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return render_view(state.controller.view(), title=LIST_TITLE)


def cmd_status(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    s = state.controller.state
    done = sum(1 for t in s.tasks if t.completed)
    api_url = getattr(state.settings, "api_url", "?")
    cache_path = getattr(state.settings, "cache_db_path", "?")
    return (
        "Status:\n"
        f"- Phase: {s.phase.value}\n"
        f"- Tasks: {len(s.tasks)} ({done} completed)\n"
        f"- Filter: {s.filter.value}\n"
        f"- Error: {s.error or '-'}\n"
        f"- Source: {api_url}\n"
        f"- Cache: {cache_path}"
    )


async def cmd_refresh(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    controller = state.controller
    # The refresh control is disabled while a refresh is in flight.
    if controller.state.refreshing:
        return "Refresh already in progress."

    if emit is not None:
        emit("Refreshing tasks...")
    await controller.refresh()
    return render_view(controller.view(), title=LIST_TITLE)


def cmd_filter(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args:
        return f"Current filter: {state.controller.state.filter.value}. Usage: /filter all|completed|incomplete"
    try:
        task_filter = TaskFilter.parse(args[0])
    except ValueError:
        return f"Unknown filter: {args[0]}. Use one of: all, completed, incomplete."

    state.controller.set_filter(task_filter)
    return render_view(state.controller.view(), title=LIST_TITLE)


def cmd_toggle(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args:
        return "Usage: /toggle <task id>"
    try:
        task_id = int(args[0])
    except ValueError:
        return f"Task id must be a number, got: {args[0]}"

    controller = state.controller
    if not any(t.id == task_id for t in controller.state.tasks):
        return f"No task with id {task_id}."

    controller.toggle_complete(task_id)
    return render_view(controller.view(), title=LIST_TITLE)


async def cmd_cache(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args or args[0].lower() != "clear":
        return "Usage: /cache clear"

    clear = getattr(state.cache, "clear", None)
    if clear is None:
        return "This cache does not support clearing."
    try:
        await clear()
    except CacheError as e:
        logger.warning("Cache clear failed: %s", e)
        return "Failed to clear the cache."
    return "Cache cleared. Tasks will be fetched from the network on next start."


registry.register("help", cmd_help, "show this help")
registry.register("list", cmd_list, "show the task list", aliases=["ls"])
registry.register("status", cmd_status, "show sync status")
registry.register("refresh", cmd_refresh, "fetch tasks from the network", aliases=["retry"])
registry.register("filter", cmd_filter, "set filter: all | completed | incomplete")
registry.register("toggle", cmd_toggle, "mark/unmark a task as complete (local only)")
registry.register("cache", cmd_cache, "/cache clear - drop the locally cached tasks")
