"""Content templates.

A ``contentTemplate`` item holds a run of content items and one or more
templates (items tagged ``template``). Each template is filled with the
content that follows it: ``templateSlot`` items are replaced by the next
content item (or, for named templates, by the content item of the same
name), a ``templateRepeat`` child is cloned once per content item, and a
trailing ``templateOptional`` template is dropped when no content is left.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pagewright.utils.tags import tag_exists

TEMPLATE_BREAK: dict[str, Any] = {"metadata": {"tags": [{"id": "templateBreak"}]}}


@dataclass
class ContentTemplate:
    content: list[Any] = field(default_factory=list)
    named_content: dict[str, Any] = field(default_factory=dict)
    templates: list[Any] = field(default_factory=list)


def get_content_template(content: Any, named: bool = False) -> ContentTemplate:
    """Separate templates from content, leaving a break marker where each template was."""
    if not isinstance(content, list) or not content:
        return ContentTemplate()

    named_content: dict[str, Any] = {}
    templates: list[Any] = []
    new_content: list[Any] = []

    for item in content:
        if named and isinstance(item, Mapping) and isinstance(item.get("name"), str):
            named_content[item["name"]] = dict(item)

        if tag_exists(item, "template"):
            templates.append(dict(item))
            new_content.append(copy.deepcopy(TEMPLATE_BREAK))
            continue

        new_content.append(item)

    return ContentTemplate(
        content=new_content,
        named_content=named_content,
        templates=copy.deepcopy(templates),
    )


def _repeat_children(children: list[Any], content: list[Any]) -> list[Any]:
    new_children = list(children)
    repeat_index = next((i for i, child in enumerate(children) if tag_exists(child, "templateRepeat")), -1)
    if repeat_index == -1:
        return new_children

    break_index = next(
        (i for i, item in enumerate(content) if tag_exists(item, "templateBreak")),
        len(content),
    )
    repeat = children[repeat_index]
    for _ in range(max(0, break_index - 1 - repeat_index)):
        new_children.insert(repeat_index, copy.deepcopy(repeat))

    return new_children


def map_content_template(
    templates: Any,
    content: list[Any] | None = None,
    named_content: Mapping[str, Any] | None = None,
    named: bool = False,
) -> Any:
    """Fill template slots with content, consuming ``content`` from the front."""
    if not isinstance(templates, list) or not templates:
        return templates

    content = content if content is not None else []
    named_content = named_content or {}
    last_index = len(templates) - 1

    for i in range(len(templates)):
        if i >= len(templates):
            break

        template = templates[i]

        if content and tag_exists(content[0], "templateBreak"):
            content.pop(0)

        if tag_exists(template, "templateOptional") and i == last_index and not content:
            templates.pop()
            break

        if not isinstance(template, Mapping):
            continue

        is_slot = tag_exists(template, "templateSlot")
        children = template.get("content")
        if isinstance(children, list) and children and not is_slot and not named:
            children = _repeat_children(children, content)

        if is_slot and content:
            fill = named_content.get(template.get("name", "")) if named else content.pop(0)
            if fill:
                templates[i] = fill
            continue

        if isinstance(children, list):
            mapped = map_content_template(children, content, named_content, named)
            templates[i] = {**template, "content": mapped}

    return templates
