"""Render fragments outside a full page build.

Used for excerpts and preview snippets. The output is the same markup the
full pipeline produces for the same content and render functions.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pagewright.context import RenderContext
from pagewright.render.engine import render_content, render_item


async def render_inline_content(content: Any, **kwargs: Any) -> str:
    """Render ``content`` with an empty page context unless ``kwargs`` supplies one."""
    kwargs.setdefault("parents", ())
    kwargs.setdefault("page_data", {})
    kwargs.setdefault("page_contains", set())
    kwargs.setdefault("page_headings", [])
    return await render_content(content, **kwargs)


async def render_inline_item(item: Any, *, context: RenderContext | None = None) -> str:
    if not isinstance(item, Mapping):
        return ""

    result = await render_item(item, context=context)
    if result is None or result.data is None:
        return ""
    return result.data.output
