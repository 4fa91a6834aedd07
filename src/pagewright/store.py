"""Build-time data shared by render functions and the link resolver.

The store is filled once per build (or per serverless request) from the
normalized content and read while rendering.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pagewright.config.settings import RenderSettings
    from pagewright.context import RenderContext

logger = logging.getLogger(__name__)

ParentEntry = tuple[str, str, str]
"""``(parent_id, parent_slug, parent_title)``"""


@dataclass
class Store:
    slugs: dict[str, tuple[str, ...]] = field(default_factory=dict)
    parents: dict[str, dict[str, ParentEntry]] = field(default_factory=dict)
    navigations: list[Any] = field(default_factory=list)
    navigation_items: list[Any] = field(default_factory=list)
    form_meta: dict[str, Any] = field(default_factory=dict)
    archive_meta: dict[str, dict[str, Any]] = field(default_factory=dict)
    image_meta: dict[str, Any] = field(default_factory=dict)
    taxonomies: dict[str, Any] = field(default_factory=dict)
    serverless: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def item_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def clear(self) -> None:
        for f in fields(self):
            setattr(self, f.name, f.default_factory())  # type: ignore[misc]

    def get_item(self, name: str) -> Any:
        if name not in self.item_names():
            return None
        return getattr(self, name)

    def set_item(self, name: str, value: Any, sub_key: str | None = None) -> bool:
        """Replace a store property, or one key of it when ``sub_key`` is given."""
        if name not in self.item_names() or not isinstance(value, Mapping | list | tuple):
            return False

        if sub_key:
            getattr(self, name)[sub_key] = value
        else:
            setattr(self, name, value)

        return True

    def set_data(self, all_data: Any, settings: RenderSettings) -> bool:
        """Record navigations, parents and archive meta from the full content set."""
        if not isinstance(all_data, Mapping):
            return False

        navigation = all_data.get("navigation")
        navigation_item = all_data.get("navigationItem")
        self.navigations = list(navigation) if isinstance(navigation, list) else []
        self.navigation_items = list(navigation_item) if isinstance(navigation_item, list) else []

        content = all_data.get("content")
        data = {**all_data, **(content if isinstance(content, Mapping) else {})}

        for content_type in settings.hierarchical_types:
            items = data.get(content_type)
            if not isinstance(items, list):
                continue

            for item in items:
                if isinstance(item, Mapping):
                    self._record_item(item, content_type, settings)

        return True

    def _record_item(self, item: Mapping[str, Any], content_type: str, settings: RenderSettings) -> None:
        item_id = item.get("id")
        if not isinstance(item_id, str) or not item_id:
            return

        archive = item.get("archive")
        if isinstance(archive, str) and archive:
            archive_type = settings.normal_types.get(archive, archive)
            locale = item.get("locale") if isinstance(item.get("locale"), str) else ""
            entry = {
                "id": item_id,
                "slug": item.get("slug", ""),
                "title": item.get("title", ""),
                "contentType": content_type,
                **_configured_labels(settings, archive_type, locale),
            }

            if locale:
                self.archive_meta.setdefault(archive_type, {})[locale] = entry
            else:
                self.archive_meta[archive_type] = entry

        parent = item.get("parent")
        if isinstance(parent, Mapping):
            parent_id, parent_slug, parent_title = (parent.get(key) for key in ("id", "slug", "title"))
            if all(isinstance(value, str) and value for value in (parent_id, parent_slug, parent_title)):
                if parent_id == item_id:
                    logger.warning("Ignoring %s %s listed as its own parent", content_type, item_id)
                    return
                self.parents.setdefault(content_type, {})[item_id] = (parent_id, parent_slug, parent_title)


def _configured_labels(settings: RenderSettings, archive_type: str, locale: str) -> dict[str, Any]:
    configured = settings.archive_meta.get(archive_type)
    if isinstance(configured, dict):
        configured = configured.get(locale) if locale else None
    if configured is None:
        return {}

    return {
        key: value
        for key, value in configured.model_dump().items()
        if key not in {"id", "slug", "title"} and value
    }


def _store(context: RenderContext | None) -> Store:
    from pagewright.context import get_context

    return (context or get_context()).store


def get_store_item(name: str, *, context: RenderContext | None = None) -> Any:
    return _store(context).get_item(name)


def set_store_item(
    name: str, value: Any, sub_key: str | None = None, *, context: RenderContext | None = None
) -> bool:
    return _store(context).set_item(name, value, sub_key)


def set_store_data(all_data: Any, *, context: RenderContext | None = None) -> bool:
    from pagewright.context import get_context

    ctx = context or get_context()
    return ctx.store.set_data(all_data, ctx.settings)
