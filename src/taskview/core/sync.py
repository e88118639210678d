# src/taskview/core/sync.py

from __future__ import annotations

"""
Sync controller.

Owns the single SyncState value and orchestrates:
- initial load: cache first, network fallback
- explicit refresh: network first, cache overwrite
- local-only mutations (toggle, filter)

State is replaced wholesale on every change and listeners are notified with the
new value. Cache problems are soft (logged); remote problems become the generic
error state with a retry affordance.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import replace

from .errors import CacheReadError, CacheWriteError, TaskSourceError
from .mutations import toggle_complete as _toggle_complete
from .ports import TaskCache, TaskSource
from .state import GENERIC_LOAD_ERROR, SyncPhase, SyncState
from .view import TaskView, project_view
from ..tasks.task_models import TaskCollection, TaskFilter

logger = logging.getLogger(__name__)

StateListener = Callable[[SyncState], None]


class SyncController:
    def __init__(
        self,
        source: TaskSource,
        cache: TaskCache,
        *,
        state: SyncState | None = None,
    ) -> None:
        self._source = source
        self._cache = cache
        self._state = state if state is not None else SyncState.initial()
        self._listeners: list[StateListener] = []
        # Bumped by every fetch attempt; only the newest attempt may apply its result.
        self._generation = 0
        # Cache writes run one at a time so an older write cannot land after a newer one.
        self._write_lock = asyncio.Lock()
        self._initial_started = False
        self._closed = False

    # ---- state plumbing ----

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a render callback; returns a function that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _set_state(self, new_state: SyncState) -> None:
        if self._closed:
            logger.debug("State update after close ignored (phase=%s)", new_state.phase.value)
            return
        if new_state == self._state:
            return
        self._state = new_state
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception:
                logger.exception("State listener failed")

    def _is_current(self, generation: int) -> bool:
        return not self._closed and generation == self._generation

    # ---- loading ----

    async def _try_cache(self) -> TaskCollection | None:
        try:
            return await self._cache.read()
        except CacheReadError as e:
            logger.warning("Cache read failed, falling back to network: %s", e)
        except Exception:
            logger.exception("Unexpected cache read failure, falling back to network")
        return None

    async def load_initial(self) -> None:
        """
        Startup load. A cache hit becomes the state and the network is not
        contacted; a miss or read failure falls back to fetch_from_remote().
        """
        if self._initial_started:
            logger.debug("load_initial already ran; ignoring")
            return
        self._initial_started = True

        generation = self._generation
        cached = await self._try_cache()

        if not self._is_current(generation):
            logger.debug("Cache result superseded by a newer fetch; dropping")
            return

        if cached is not None:
            logger.info("Loaded %d tasks from cache", len(cached))
            self._set_state(replace(self._state, tasks=cached, phase=SyncPhase.READY, error=None))
            return

        logger.info("Cache empty, fetching tasks from remote")
        await self.fetch_from_remote()

    async def fetch_from_remote(self, *, refreshing: bool = False) -> bool:
        """
        Fetch all tasks and reconcile them into state.

        Returns True when this attempt's result was applied. A failure keeps the
        current tasks and sets the generic error message.
        """
        self._generation += 1
        generation = self._generation

        phase = SyncPhase.REFRESHING if refreshing else SyncPhase.INITIAL_LOADING
        self._set_state(replace(self._state, phase=phase, error=None))

        try:
            tasks = await self._source.fetch_all()
        except Exception as e:
            if isinstance(e, TaskSourceError):
                # Cause goes to the log file only; the console shows the generic message.
                logger.warning("Fetching tasks failed: %s", e)
                logger.debug("Fetch failure details", exc_info=True)
            else:
                logger.exception("Unexpected error while fetching tasks")

            if not self._is_current(generation):
                logger.debug("Failed fetch #%d superseded; dropping", generation)
                return False
            self._set_state(replace(self._state, phase=SyncPhase.ERROR, error=GENERIC_LOAD_ERROR))
            return False

        if not self._is_current(generation):
            logger.info("Fetch #%d finished after a newer fetch or close; dropping result", generation)
            return False

        self._set_state(replace(self._state, tasks=tasks, phase=SyncPhase.READY, error=None))

        async with self._write_lock:
            if not self._is_current(generation):
                logger.debug("Cache write for fetch #%d skipped; a newer fetch owns the cache", generation)
                return True
            try:
                await self._cache.write(tasks)
            except CacheWriteError as e:
                logger.warning("Cache write failed (ignored): %s", e)
            except Exception:
                logger.exception("Unexpected cache write failure (ignored)")

        return True

    async def refresh(self) -> bool:
        """Explicit refresh (also the retry action). Local toggles are discarded on success."""
        logger.info("Refreshing tasks")
        return await self.fetch_from_remote(refreshing=True)

    # ---- local-only operations ----

    def toggle_complete(self, task_id: int) -> None:
        self._set_state(_toggle_complete(self._state, task_id))

    def set_filter(self, task_filter: TaskFilter) -> None:
        if task_filter == self._state.filter:
            return
        self._set_state(replace(self._state, filter=task_filter))

    def view(self) -> TaskView:
        return project_view(self._state)

    def close(self) -> None:
        """Teardown: results of fetches still in flight are dropped when they land."""
        if self._closed:
            return
        self._closed = True
        self._listeners.clear()
        logger.debug("SyncController closed")
