"""Redirect rules gathered from ``redirect`` content items."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pagewright.context import RenderContext


def set_redirects(data: Any, *, context: RenderContext | None = None) -> bool:
    """Flatten the ``redirect`` lists of ``data`` into the context.

    Each entry looks like ``{"redirect": ["/old /new 301", ...]}``. Returns
    True when at least one rule was collected.
    """
    if not isinstance(data, list):
        return False

    from pagewright.context import get_context

    ctx = context or get_context()
    redirects: list[str] = []

    for item in data:
        if not isinstance(item, Mapping):
            continue
        rules = item.get("redirect")
        if isinstance(rules, list):
            redirects.extend(rule for rule in rules if isinstance(rule, str))

    ctx.redirects = redirects
    return bool(redirects)
