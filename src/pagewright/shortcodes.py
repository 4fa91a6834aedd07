"""Bracket shortcodes in rendered content.

A shortcode is written ``[name attr="value"]inner[/name]``. Registered
callbacks receive the parsed :class:`ShortcodeData` and return the markup
that replaces the whole tag. Attribute values are HTML-escaped and can be
coerced to ``number`` or ``boolean`` per shortcode.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

from markupsafe import escape

from pagewright.utils.async_utils import maybe_await

if TYPE_CHECKING:
    from pagewright.context import RenderContext

logger = logging.getLogger(__name__)

AttributeValue = str | int | bool
AttributeType = Literal["string", "number", "boolean"]

_ATTR_RE = re.compile(r'([\w-]+)="(.*?)"')
_INT_RE = re.compile(r"\s*[-+]?\d+")


@dataclass
class ShortcodeData:
    name: str
    replace_content: str
    content: str
    attributes: dict[str, AttributeValue] = field(default_factory=dict)
    children: list[ShortcodeData] = field(default_factory=list)


ShortcodeCallback = Callable[[ShortcodeData], str | Awaitable[str]]


@dataclass
class Shortcode:
    callback: ShortcodeCallback | None = None
    attribute_types: dict[str, AttributeType] = field(default_factory=dict)
    child: ChildShortcode | None = None


@dataclass
class ChildShortcode(Shortcode):
    name: str = ""


def _coerce(value: str, attr_type: str | None) -> AttributeValue:
    if attr_type == "number":
        # Leading integer, so "12px" is 12 and "3.5" is 3
        match = _INT_RE.match(value)
        return int(match.group(0)) if match else 0
    if attr_type == "boolean":
        return value == "true"
    return value


def _tag_pattern(names: str) -> re.Pattern[str]:
    return re.compile(rf"\[/?(?P<name>{names})[^\]]*?\]")


def parse_shortcodes(content: str, names: str, shortcodes: Mapping[str, Shortcode]) -> list[ShortcodeData]:
    """Extract every complete shortcode in ``content`` whose name matches ``names``.

    Args:
        content: Text to search
        names: Regex alternation of shortcode names, e.g. ``"tabs|tab"``
        shortcodes: Definitions by name, used for attribute types and children

    """
    if not isinstance(content, str) or not content or not names:
        return []

    matches = list(_tag_pattern(names).finditer(content))
    data: list[ShortcodeData] = []

    while matches:
        opening = matches.pop(0)
        tag = opening.group(0)
        name = opening.group("name")

        if tag.startswith("[/"):
            continue

        closing_tag = f"[/{name}]"
        closing_index = next((i for i, m in enumerate(matches) if m.group(0) == closing_tag), None)
        if closing_index is None:
            continue

        closing = matches.pop(closing_index)
        info = shortcodes.get(name)
        if info is None:
            continue

        attributes: dict[str, AttributeValue] = {}
        for key, raw in _ATTR_RE.findall(tag):
            attributes[key] = _coerce(str(escape(raw)), info.attribute_types.get(key))

        inner = content[opening.end() : closing.start()]
        children: list[ShortcodeData] = []
        if info.child is not None and info.child.name:
            children = parse_shortcodes(inner, re.escape(info.child.name), {info.child.name: info.child})

        data.append(
            ShortcodeData(
                name=name,
                replace_content=content[opening.start() : closing.end()],
                content=inner,
                attributes=attributes,
                children=children,
            )
        )

    return data


class ShortcodeRegistry:
    def __init__(self) -> None:
        self._shortcodes: dict[str, Shortcode] = {}

    def add(self, name: str, shortcode: Shortcode) -> bool:
        if not isinstance(name, str) or not name or not isinstance(shortcode, Shortcode):
            return False
        self._shortcodes[name] = shortcode
        return True

    def remove(self, name: str) -> bool:
        if not isinstance(name, str) or name not in self._shortcodes:
            return False
        del self._shortcodes[name]
        return True

    def reset(self) -> None:
        self._shortcodes = {}

    def set(self, shortcodes: Mapping[str, Shortcode | None]) -> bool:
        if not isinstance(shortcodes, Mapping) or not shortcodes:
            return False

        self.reset()
        for name, shortcode in shortcodes.items():
            if shortcode is not None:
                self.add(name, shortcode)
        return True

    def __contains__(self, name: object) -> bool:
        return name in self._shortcodes

    def __len__(self) -> int:
        return len(self._shortcodes)

    def _names_pattern(self) -> str:
        return "|".join(re.escape(name) for name in self._shortcodes)

    async def do_shortcodes(self, content: str) -> str:
        """Replace registered shortcodes in ``content`` with their callback output."""
        if not self._shortcodes or not isinstance(content, str):
            return content

        output = content
        for data in parse_shortcodes(content, self._names_pattern(), self._shortcodes):
            callback = self._shortcodes[data.name].callback
            if callback is None:
                continue

            result = await maybe_await(callback(data))
            if isinstance(result, str) and result:
                output = output.replace(data.replace_content, result, 1)
            else:
                logger.debug("Shortcode %s returned no markup", data.name)

        return output

    def strip_shortcodes(self, content: str) -> str:
        """Remove registered shortcode tags, keeping their inner text."""
        if not self._shortcodes or not isinstance(content, str):
            return content
        return _tag_pattern(self._names_pattern()).sub("", content)


def _registry(context: RenderContext | None) -> ShortcodeRegistry:
    from pagewright.context import get_context

    return (context or get_context()).shortcodes


def add_shortcode(name: str, shortcode: Shortcode, *, context: RenderContext | None = None) -> bool:
    return _registry(context).add(name, shortcode)


def remove_shortcode(name: str, *, context: RenderContext | None = None) -> bool:
    return _registry(context).remove(name)


def reset_shortcodes(*, context: RenderContext | None = None) -> None:
    _registry(context).reset()


def set_shortcodes(
    shortcodes: Mapping[str, Shortcode | None], *, context: RenderContext | None = None
) -> bool:
    return _registry(context).set(shortcodes)


async def do_shortcodes(content: str, *, context: RenderContext | None = None) -> str:
    return await _registry(context).do_shortcodes(content)


def strip_shortcodes(content: str, *, context: RenderContext | None = None) -> str:
    return _registry(context).strip_shortcodes(content)
