"""Lookups on the ``metadata.tags`` list carried by CMS items."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, NamedTuple


class Tag(NamedTuple):
    id: str
    name: str


def get_tag(obj: Any, tag_id: str) -> Tag | None:
    """Return the first tag on ``obj`` whose id equals ``tag_id``."""
    if not isinstance(obj, Mapping) or not isinstance(tag_id, str) or not tag_id:
        return None

    metadata = obj.get("metadata")
    tags = metadata.get("tags") if isinstance(metadata, Mapping) else None
    if not isinstance(tags, list):
        return None

    for tag in tags:
        if isinstance(tag, Mapping) and tag.get("id") == tag_id:
            name = tag.get("name")
            return Tag(id=tag_id, name=name if isinstance(name, str) else "")

    return None


def tag_exists(obj: Any, tag_id: str) -> bool:
    return get_tag(obj, tag_id) is not None
