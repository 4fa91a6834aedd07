"""Hook functions bound to the active render context."""

from __future__ import annotations

from collections.abc import Awaitable, Coroutine, Mapping
from typing import Any, TypeVar

from pagewright.context import RenderContext, get_context
from pagewright.hooks.registry import Callback

T = TypeVar("T")


def add_filter(name: str, callback: Callback, *, context: RenderContext | None = None) -> bool:
    return (context or get_context()).filters.add(name, callback)


def remove_filter(name: str, callback: Callback, *, context: RenderContext | None = None) -> bool:
    return (context or get_context()).filters.remove(name, callback)


def apply_filters(
    name: str,
    value: T,
    args: Any = None,
    is_async: bool = False,
    *,
    context: RenderContext | None = None,
) -> T | Awaitable[T]:
    return (context or get_context()).filters.apply(name, value, args, is_async)


def apply_filters_sync(name: str, value: T, args: Any = None, *, context: RenderContext | None = None) -> T:
    return (context or get_context()).filters.apply_sync(name, value, args)


def apply_filters_async(
    name: str, value: T, args: Any = None, *, context: RenderContext | None = None
) -> T | Awaitable[T]:
    """Run the filters for ``name`` one after another, awaiting each result.

    Returns ``value`` itself when nothing is registered; callers pass the
    result through :func:`~pagewright.utils.async_utils.maybe_await`.
    """
    return (context or get_context()).filters.apply_async(name, value, args)


def reset_filters(*, context: RenderContext | None = None) -> None:
    (context or get_context()).filters.reset()


def set_filters(filters: Mapping[str, Callback | None], *, context: RenderContext | None = None) -> bool:
    return (context or get_context()).filters.set(filters)


def add_action(name: str, callback: Callback, *, context: RenderContext | None = None) -> bool:
    return (context or get_context()).actions.add(name, callback)


def remove_action(name: str, callback: Callback, *, context: RenderContext | None = None) -> bool:
    return (context or get_context()).actions.remove(name, callback)


def do_actions(
    name: str, args: Any = None, is_async: bool = False, *, context: RenderContext | None = None
) -> Coroutine[Any, Any, None] | None:
    return (context or get_context()).actions.do(name, args, is_async)


def do_actions_async(
    name: str, args: Any = None, *, context: RenderContext | None = None
) -> Coroutine[Any, Any, None] | None:
    return (context or get_context()).actions.do_async(name, args)


def dispatch_actions(name: str, args: Any = None, *, context: RenderContext | None = None) -> Any:
    return (context or get_context()).actions.dispatch(name, args)


def reset_actions(*, context: RenderContext | None = None) -> None:
    (context or get_context()).actions.reset()


def set_actions(actions: Mapping[str, Callback | None], *, context: RenderContext | None = None) -> bool:
    return (context or get_context()).actions.set(actions)
