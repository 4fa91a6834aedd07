"""Render context.

Holds every piece of mutable render state (hook registries, the render
function table, the store, asset maps, shortcodes and redirects) in one
object instead of module globals.

A process-wide default context is used unless a task installs its own with
:func:`set_context` / :func:`use_context`; the override lives in a
``ContextVar`` so concurrent requests in one worker can each carry their own.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pagewright.assets import AssetMap
from pagewright.config.settings import RenderSettings
from pagewright.hooks.actions import ActionRegistry
from pagewright.hooks.filters import FilterRegistry
from pagewright.shortcodes import ShortcodeRegistry
from pagewright.store import Store

if TYPE_CHECKING:
    from pagewright.render.types import RenderFunctions


def _empty_render_functions() -> RenderFunctions:
    from pagewright.render.types import RenderFunctions

    return RenderFunctions()


@dataclass
class RenderContext:
    settings: RenderSettings = field(default_factory=RenderSettings)
    filters: FilterRegistry = field(default_factory=FilterRegistry)
    actions: ActionRegistry = field(default_factory=ActionRegistry)
    render_functions: RenderFunctions = field(default_factory=_empty_render_functions)
    store: Store = field(default_factory=Store)
    shortcodes: ShortcodeRegistry = field(default_factory=ShortcodeRegistry)
    scripts: AssetMap = field(default_factory=lambda: AssetMap(extension="js"))
    styles: AssetMap = field(default_factory=lambda: AssetMap(extension="scss"))
    redirects: list[str] = field(default_factory=list)

    def clear_assets(self) -> None:
        """Forget the assets collected for the previous page."""
        self.scripts.clear_item()
        self.styles.clear_item()


_default_context: RenderContext | None = None
_current_context: ContextVar[RenderContext | None] = ContextVar("pagewright_context", default=None)


def get_context() -> RenderContext:
    global _default_context

    context = _current_context.get()
    if context is not None:
        return context
    if _default_context is None:
        _default_context = RenderContext()
    return _default_context


def set_context(context: RenderContext) -> Token[RenderContext | None]:
    return _current_context.set(context)


@contextmanager
def use_context(context: RenderContext) -> Iterator[RenderContext]:
    token = set_context(context)
    try:
        yield context
    finally:
        _current_context.reset(token)


def reset_context(settings: RenderSettings | None = None) -> RenderContext:
    """Replace the default context with a fresh one and drop any override."""
    global _default_context

    _default_context = RenderContext(settings=settings or RenderSettings())
    _current_context.set(None)
    return _default_context
