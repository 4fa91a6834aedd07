"""Slug and permalink resolution.

A slug is composed from ordered path segments::

    [locale] [type segment] [taxonomy] [ancestors] [slug] [?query]

The locale prefix comes from ``locale_in_slug``. The type segment is the
archive page slug of the item's (or its taxonomy's primary) content type,
unless ``type_in_slug`` overrides it. Ancestors come from the store's parent
map: hierarchical types walk their own chain, other types walk the chain of
their archive page.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal, overload
from urllib.parse import urlencode

from pagewright.context import RenderContext, get_context
from pagewright.hooks.names import FilterName
from pagewright.links.archive import get_archive_info, get_taxonomy_info

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlugParent:
    """A breadcrumb entry."""

    id: str
    slug: str
    title: str
    content_type: str


@dataclass(frozen=True)
class SlugResult:
    slug: str
    parents: list[SlugParent] = field(default_factory=list)


def _ancestors(item_id: str, content_type: str, ctx: RenderContext) -> list[SlugParent]:
    """Walk the parent map up from ``item_id``, returning root-first ancestors."""
    parent_map = ctx.store.parents.get(content_type, {})
    ancestors: list[SlugParent] = []
    seen = {item_id}
    current = item_id

    while current and current in parent_map:
        parent_id, parent_slug, parent_title = parent_map[current]
        if parent_id in seen:
            logger.warning("Parent cycle at %s %s, stopping", content_type, parent_id)
            break

        seen.add(parent_id)
        ancestors.insert(
            0, SlugParent(id=parent_id, slug=parent_slug, title=parent_title, content_type=content_type)
        )
        current = parent_id

    return ancestors


def _type_in_slug(content_type: str, locale: str, ctx: RenderContext) -> str | None:
    override = ctx.settings.type_in_slug.get(content_type)
    if isinstance(override, str):
        return override
    if isinstance(override, dict):
        for key in (locale, ctx.settings.default_locale):
            if key and isinstance(override.get(key), str):
                return override[key]
    return None


def _with_query(path: str, params: Mapping[str, Any] | None, page: int) -> str:
    query = {key: value for key, value in (params or {}).items() if isinstance(key, str) and key}
    if isinstance(page, int) and not isinstance(page, bool) and page > 1:
        query["page"] = page
    if not query:
        return path
    return f"{path}/?{urlencode(query)}" if path else f"?{urlencode(query)}"


@overload
def get_slug(
    slug: str = ...,
    *,
    id: str = ...,
    content_type: str = ...,
    item_data: Mapping[str, Any] | None = ...,
    page: int = ...,
    params: Mapping[str, Any] | None = ...,
    return_parents: Literal[False] = ...,
    context: RenderContext | None = ...,
) -> str: ...


@overload
def get_slug(
    slug: str = ...,
    *,
    id: str = ...,
    content_type: str = ...,
    item_data: Mapping[str, Any] | None = ...,
    page: int = ...,
    params: Mapping[str, Any] | None = ...,
    return_parents: Literal[True],
    context: RenderContext | None = ...,
) -> SlugResult: ...


def get_slug(
    slug: str = "",
    *,
    id: str = "",
    content_type: str = "page",
    item_data: Mapping[str, Any] | None = None,
    page: int = 0,
    params: Mapping[str, Any] | None = None,
    return_parents: bool = False,
    context: RenderContext | None = None,
) -> str | SlugResult:
    """Resolve the site-relative path of an item.

    Args:
        slug: The item's own slug; ``"index"`` is the root of its section
        id: Item id, used to look up ancestors
        content_type: The item's content type
        item_data: The item, for its locale and taxonomy
        page: Pagination page, added as ``page`` to the query when above 1
        params: Extra query parameters
        return_parents: Also return root-first breadcrumbs
        context: Render context, the active one when omitted

    Returns:
        The slug without leading or trailing slash, or a :class:`SlugResult`
        when ``return_parents`` is set

    """
    ctx = context or get_context()
    settings = ctx.settings
    slug = slug if isinstance(slug, str) else ""
    content_type = content_type if isinstance(content_type, str) and content_type else "page"
    item = item_data if isinstance(item_data, Mapping) else {}

    # Locale
    item_locale = item.get("locale") if isinstance(item.get("locale"), str) else ""
    locale_part = settings.locale_in_slug.get(item_locale, "") if item_locale else ""
    parts: list[str] = [locale_part] if locale_part else []

    is_index = slug == "index"
    if is_index and not return_parents:
        return _with_query("/".join(parts), params, page)

    # Taxonomy and archive
    is_taxonomy = content_type == "taxonomy"
    is_term = content_type == "term"
    taxonomy = get_taxonomy_info(content_type, item, context=ctx)
    archive = get_archive_info(taxonomy.primary_content_type or content_type, item_locale, context=ctx)

    type_part = ""
    archive_parents: list[SlugParent] = []
    if archive.exists:
        type_part = archive.slug
        archive_parents.append(
            SlugParent(
                id=archive.id,
                slug=archive.slug,
                title=archive.title,
                content_type=archive.content_type,
            )
        )

    drop_archive = (is_taxonomy or is_term) and not taxonomy.use_content_type_slug
    if drop_archive:
        type_part = ""
        archive_parents = []

    taxonomy_part = ""
    if is_term and taxonomy.id:
        taxonomy_part = taxonomy.localized_slug(item_locale, settings.default_locale)
        if taxonomy_part and taxonomy.is_page:
            archive_parents.append(
                SlugParent(id=taxonomy.id, slug=taxonomy_part, title=taxonomy.title, content_type="taxonomy")
            )

    override = _type_in_slug(content_type, item_locale, ctx)
    if override is not None:
        type_part = override

    # Ancestors
    ancestors: list[SlugParent] = []
    if content_type in settings.hierarchical_types:
        ancestors = _ancestors(id, content_type, ctx) if isinstance(id, str) else []
    elif archive.exists and not drop_archive:
        ancestors = _ancestors(archive.id, archive.content_type, ctx)

    parts.extend(part for part in (type_part, taxonomy_part) if part)
    parts.extend(parent.slug for parent in ancestors)
    parents = archive_parents + ancestors

    filter_args = {
        "id": id,
        "slug": slug,
        "contentType": content_type,
        "itemData": item_data,
        "page": page,
        "params": params,
    }

    parts = ctx.filters.apply_sync(FilterName.SLUG_PARTS, parts, filter_args)

    if slug and not is_index:
        parts.append(slug)

    full_slug = "/".join(part for part in parts if part)
    full_slug = ctx.filters.apply_sync(FilterName.SLUG, full_slug, filter_args)

    full_slug = _with_query(full_slug, params, page)

    if return_parents:
        return SlugResult(slug=full_slug, parents=parents)

    return full_slug


def get_permalink(
    slug: str = "", trailing_slash: bool = True, *, context: RenderContext | None = None
) -> str:
    """Absolute (production) or root-relative URL for ``slug``.

    Root slugs (``""`` and ``"/"``) produce exactly the base URL. No slash is
    added after a query string.
    """
    env = (context or get_context()).settings.env
    base = "/"
    if env.prod and env.prod_url:
        base = f"{env.prod_url.rstrip('/')}/"

    slug = slug.lstrip("/") if isinstance(slug, str) else ""
    if not slug:
        return base

    add_slash = trailing_slash and not slug.endswith("/") and "?" not in slug
    return f"{base}{slug}{'/' if add_slash else ''}"


def get_link(
    internal_link: Mapping[str, Any] | None = None,
    external_link: str | None = None,
    *,
    context: RenderContext | None = None,
) -> str:
    """Permalink of an internal link item, else the external URL, else ``""``."""
    if isinstance(internal_link, Mapping):
        slug = get_slug(
            internal_link.get("slug") if isinstance(internal_link.get("slug"), str) else "",
            id=internal_link.get("id") if isinstance(internal_link.get("id"), str) else "",
            content_type=internal_link.get("contentType") or "page",
            item_data=internal_link,
            context=context,
        )
        return get_permalink(slug, context=context)

    return external_link if isinstance(external_link, str) and external_link else ""
