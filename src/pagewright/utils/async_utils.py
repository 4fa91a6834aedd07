"""Helpers for mixing sync and async render callables."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Coroutine
from concurrent.futures import ThreadPoolExecutor
from typing import Any, TypeVar

T = TypeVar("T")


async def maybe_await(value: Any) -> Any:
    """Await ``value`` when it is awaitable, otherwise return it unchanged.

    Render functions, layouts and hook callbacks may be plain functions or
    coroutines; call sites pass whatever the callable returned through here.
    """
    if inspect.isawaitable(value):
        return await value
    return value


def _has_running_loop() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


def run_async_safely(coro: Coroutine[Any, Any, T]) -> T:
    """Block until ``coro`` finishes and return its result.

    Backs :func:`pagewright.render.render_sync`. From plain synchronous code
    the coroutine gets its own event loop. Inside a running loop (a sync
    hook called from an async render, a notebook) that loop cannot be
    re-entered, so the coroutine runs on a fresh loop in a worker thread.
    """
    if not _has_running_loop():
        return asyncio.run(coro)

    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="pagewright-render") as executor:
        return executor.submit(asyncio.run, coro).result()
