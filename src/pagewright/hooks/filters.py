"""Filters: callbacks that transform a value in registration order."""

from __future__ import annotations

from collections.abc import Awaitable, Sequence
from typing import Any, TypeVar

from pagewright.hooks.names import FilterName
from pagewright.hooks.registry import Callback, HookRegistry
from pagewright.utils.async_utils import maybe_await

T = TypeVar("T")


class FilterRegistry(HookRegistry):
    """Filter callbacks receive ``(value, args)`` and return the new value.

    Two entry points exist on purpose. ``apply_sync`` is the hot path used
    while concatenating markup and never awaits anything. ``apply_async``
    awaits each callback in turn, and hands back the value itself (not an
    awaitable) when nothing is registered, so callers can skip the await.
    """

    names = tuple(FilterName)

    def apply_sync(self, name: str, value: T, args: Any = None) -> T:
        for callback in self.callbacks(name):
            value = callback(value, args)
        return value

    def apply_async(self, name: str, value: T, args: Any = None) -> T | Awaitable[T]:
        callbacks = self.callbacks(name)
        if not callbacks:
            return value
        return self._apply_sequentially(callbacks, value, args)

    def apply(self, name: str, value: T, args: Any = None, is_async: bool = False) -> T | Awaitable[T]:
        if is_async:
            return self.apply_async(name, value, args)
        return self.apply_sync(name, value, args)

    @staticmethod
    async def _apply_sequentially(callbacks: Sequence[Callback], value: Any, args: Any) -> Any:
        for callback in callbacks:
            value = await maybe_await(callback(value, args))
        return value
