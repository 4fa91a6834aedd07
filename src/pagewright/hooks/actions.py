"""Actions: callbacks run for their side effects."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine, Sequence
from typing import Any

from pagewright.hooks.names import ActionName
from pagewright.hooks.registry import Callback, HookRegistry
from pagewright.utils.async_utils import maybe_await

logger = logging.getLogger(__name__)


class ActionRegistry(HookRegistry):
    """Action callbacks receive ``args`` and their return values are ignored.

    ``do_async`` runs callbacks strictly one after another and lets errors
    reach whoever awaits it. ``dispatch`` is the fire-and-forget variant: it
    schedules the same sequential run as a task and logs, rather than
    raises, a failure.
    """

    names = tuple(ActionName)

    def __init__(self) -> None:
        super().__init__()
        self._pending: set[asyncio.Task[None]] = set()

    def do_sync(self, name: str, args: Any = None) -> None:
        for callback in self.callbacks(name):
            callback(args)

    def do_async(self, name: str, args: Any = None) -> Coroutine[Any, Any, None] | None:
        callbacks = self.callbacks(name)
        if not callbacks:
            return None
        return self._do_sequentially(callbacks, args)

    def do(self, name: str, args: Any = None, is_async: bool = False) -> Coroutine[Any, Any, None] | None:
        if is_async:
            return self.do_async(name, args)
        self.do_sync(name, args)
        return None

    def dispatch(self, name: str, args: Any = None) -> asyncio.Task[None] | None:
        """Run the callbacks for ``name`` in the background.

        Must be called with a running event loop. Returns the scheduled task,
        or None when nothing is registered under ``name``.

        Raises:
            RuntimeError: If no event loop is running

        """
        loop = asyncio.get_running_loop()
        run = self.do_async(name, args)
        if run is None:
            return None

        task = loop.create_task(run, name=f"action:{name}")
        self._pending.add(task)
        task.add_done_callback(self._finish_dispatch)
        return task

    def _finish_dispatch(self, task: asyncio.Task[None]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("Action %s failed: %s", task.get_name(), exc)

    @staticmethod
    async def _do_sequentially(callbacks: Sequence[Callback], args: Any) -> None:
        for callback in callbacks:
            await maybe_await(callback(args))
