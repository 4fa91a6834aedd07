"""Render engine.

``render`` walks every item of every content type, ``render_item`` renders
one page through the layout, and ``render_content`` walks a content tree,
dispatching each node to the render function registered for its
``renderType``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

from pagewright.context import RenderContext, get_context
from pagewright.hooks.names import ActionName, FilterName
from pagewright.links.link import get_permalink, get_slug
from pagewright.logging_setup import print_message
from pagewright.redirects import set_redirects
from pagewright.render.templates import get_content_template, map_content_template
from pagewright.render.types import (
    LayoutArgs,
    ParentArgs,
    PreviewData,
    RenderData,
    RenderFunctionArgs,
    RenderFunctions,
    RenderItemActionArgs,
    RenderItemResult,
    ServerlessData,
)
from pagewright.utils.async_utils import maybe_await, run_async_safely
from pagewright.utils.tags import tag_exists

logger = logging.getLogger(__name__)


def set_render_functions(
    functions: Mapping[str, Any],
    layout: Any,
    navigation: Any = None,
    http_error: Any = None,
    *,
    context: RenderContext | None = None,
) -> bool:
    """Install the render-type dispatch table and page-level callables.

    Returns False and leaves the current table in place unless ``functions``
    is a mapping and ``layout`` is callable.
    """
    if not isinstance(functions, Mapping) or not callable(layout):
        print_message("Render functions", "Expected a functions mapping and a callable layout", "error")
        return False

    ctx = context or get_context()
    current = ctx.render_functions

    ctx.render_functions = RenderFunctions(
        functions=dict(functions),
        layout=layout,
        navigation=navigation if callable(navigation) else current.navigation,
        http_error=http_error if callable(http_error) else current.http_error,
    )
    return True


@dataclass
class _Walk:
    """State shared by every node of one ``render_content`` call."""

    ctx: RenderContext
    page_data: dict[str, Any]
    page_contains: set[str]
    page_headings: list[list[Any]]
    navigations: Any = None
    serverless_data: ServerlessData | None = None
    preview_data: PreviewData | None = None
    output: list[str] = field(default_factory=list)


def _split_output(output: Any) -> tuple[str, str, bool]:
    """``(start, end, keep_children)`` from a render function's return value."""
    if isinstance(output, str):
        return output, "", False
    if isinstance(output, list | tuple) and output:
        start = output[0] if isinstance(output[0], str) else ""
        end = output[1] if len(output) > 1 and isinstance(output[1], str) else ""
        return start, end, True
    return "", "", True


async def _walk(
    walk: _Walk,
    content: list[Any],
    parents: tuple[ParentArgs, ...],
    depth: int,
    headings_index: int,
) -> None:
    ctx = walk.ctx

    for item in content:
        if not isinstance(item, Mapping):
            continue

        props = dict(item)
        render_type = props.get("renderType") if isinstance(props.get("renderType"), str) else ""
        is_rich_text = render_type == "richText"
        children = props.get("content")

        if render_type == "contentTemplate":
            named = tag_exists(item, "templateNamed")
            template = get_content_template(children if isinstance(children, list) else [], named)
            children = map_content_template(
                template.templates, template.content, template.named_content, named
            )

        child_items = children if isinstance(children, list) and children and not is_rich_text else None
        child_text = children if isinstance(children, str) and children and not is_rich_text else ""

        if render_type == "content" and depth == 0:
            walk.page_headings.append([])
            headings_index = len(walk.page_headings) - 1

        start = end = ""
        filter_type = ""
        filter_args: dict[str, Any] = {}
        render_function = ctx.render_functions.get(render_type)

        if render_function is not None:
            if child_items is not None:
                props["content"] = None

            args = RenderFunctionArgs(
                item_data=props,
                parents=parents,
                render_functions=ctx.render_functions,
                page_data=walk.page_data,
                page_contains=walk.page_contains,
                page_headings=walk.page_headings,
                navigations=walk.navigations,
                serverless_data=walk.serverless_data,
                preview_data=walk.preview_data,
                children=child_items,
            )
            if is_rich_text and headings_index >= 0:
                args.headings = walk.page_headings[headings_index]

            start, end, keep_children = _split_output(await maybe_await(render_function(args)))
            if not keep_children:
                child_items = None

            walk.page_contains.add(render_type)
            filter_type = render_type
            filter_args = {**props, "content": None}
        elif render_type:
            logger.debug("No render function for %s", render_type)

        filter_hook_args = {"renderType": filter_type, "args": filter_args}
        filtered = await maybe_await(
            ctx.filters.apply_async(FilterName.RENDER_CONTENT, [start, end], filter_hook_args)
        )
        if isinstance(filtered, list | tuple) and len(filtered) == 2:
            start = filtered[0] if isinstance(filtered[0], str) else start
            end = filtered[1] if isinstance(filtered[1], str) else end

        walk.output.append(start + child_text)

        if child_items is not None:
            child_parents = parents
            if render_type:
                parent_props = {**props, "content": None}
                parent_props.pop("parents", None)
                child_parents = (*parents, ParentArgs(render_type=render_type, args=parent_props))

            await _walk(walk, child_items, child_parents, depth + 1, headings_index)

        walk.output.append(end)


async def render_content(
    content: Any,
    *,
    parents: tuple[ParentArgs, ...] = (),
    page_data: dict[str, Any] | None = None,
    page_contains: set[str] | None = None,
    page_headings: list[list[Any]] | None = None,
    navigations: Any = None,
    serverless_data: ServerlessData | None = None,
    preview_data: PreviewData | None = None,
    depth: int = 0,
    context: RenderContext | None = None,
) -> str:
    """Render a content tree to markup.

    A string is returned as is and a single item is treated as a one-item
    list. Items are rendered strictly in order. Each render function returns
    either the full markup of its item or a ``(start, end)`` pair that wraps
    the item's rendered children.

    Args:
        content: Items, a single item or a string
        parents: Ancestor render types and props, root first
        page_data: The page being rendered
        page_contains: Collects every render type used on the page
        page_headings: One list of rich text headings per top-level content area
        navigations: Whatever the navigation function produced
        serverless_data: The serverless request, if any
        preview_data: The preview request, if any
        depth: Nesting level of ``content``
        context: Render context, the active one when omitted

    """
    if isinstance(content, str):
        return content
    if isinstance(content, Mapping):
        content = [content]
    if not isinstance(content, list):
        return ""

    walk = _Walk(
        ctx=context or get_context(),
        page_data=page_data if page_data is not None else {},
        page_contains=page_contains if page_contains is not None else set(),
        page_headings=page_headings if page_headings is not None else [],
        navigations=navigations,
        serverless_data=serverless_data,
        preview_data=preview_data,
    )
    await _walk(walk, content, tuple(parents), depth, len(walk.page_headings) - 1)
    return "".join(walk.output)


def _item_meta(item: Mapping[str, Any]) -> dict[str, Any]:
    meta: dict[str, Any] = {
        "title": "",
        "description": "",
        "url": "",
        "image": "",
        "canonical": "",
        "prev": "",
        "next": "",
        "index": True,
        "isIndex": False,
    }
    if isinstance(item.get("meta"), Mapping):
        meta.update(item["meta"])

    if isinstance(item.get("metaTitle"), str) and item["metaTitle"]:
        meta["title"] = item["metaTitle"]
    if isinstance(item.get("metaDescription"), str) and item["metaDescription"]:
        meta["description"] = item["metaDescription"]

    meta_image = item.get("metaImage")
    if isinstance(meta_image, Mapping) and isinstance(meta_image.get("url"), str) and meta_image["url"]:
        meta["image"] = meta_image["url"]

    if not meta["title"] and isinstance(item.get("title"), str):
        meta["title"] = item["title"]

    return meta


def _valid_item(item: Any) -> bool:
    if not isinstance(item, Mapping):
        return False

    content_type = item.get("contentType")
    if not isinstance(content_type, str) or not content_type:
        return False
    if content_type == "taxonomy" and item.get("isPage") is not True:
        return False

    return all(isinstance(item.get(key), str) and item[key] for key in ("id", "slug"))


async def render_item(
    item: Any,
    *,
    serverless_data: ServerlessData | None = None,
    preview_data: PreviewData | None = None,
    navigations: Any = None,
    content_type: str | None = None,
    context: RenderContext | None = None,
) -> RenderItemResult | None:
    """Render one page or post through the layout.

    Returns None for items without a string ``contentType``, ``id`` and
    ``slug`` (and taxonomies that are not pages). For serverless requests,
    items whose path does not match return a result without data.
    """
    if not _valid_item(item):
        return None

    ctx = context or get_context()
    settings = ctx.settings
    item_id: str = item["id"]
    item_type: str = item["contentType"]

    page_contains: set[str] = set()
    page_headings: list[list[Any]] = []
    serverless_render = False

    ctx.clear_assets()

    start_args = RenderItemActionArgs(
        id=item_id,
        content_type=item_type,
        item_data=dict(item),
        serverless_data=serverless_data,
        preview_data=preview_data,
    )
    await maybe_await(ctx.actions.do_async(ActionName.RENDER_ITEM_START, start_args))

    meta = _item_meta(item)

    slug_kwargs: dict[str, Any] = {
        "id": item_id,
        "content_type": item_type,
        "item_data": item,
        "context": ctx,
    }
    resolved = get_slug(item["slug"], return_parents=True, **slug_kwargs)
    slug = resolved.slug
    slug_is_html = slug.endswith(".html")
    permalink = get_permalink(slug, not slug_is_html, context=ctx)
    meta["url"] = permalink
    meta["canonical"] = permalink

    taxonomy = item.get("taxonomy") if item_type == "term" else item if item_type == "taxonomy" else None
    base_type: Any = item_type
    content_types = taxonomy.get("contentTypes") if isinstance(taxonomy, Mapping) else None
    if isinstance(content_types, list) and content_types:
        base_type = content_types

    formatted_slug = f"/{slug}/" if slug and slug != "index" else "/"
    if slug_is_html:
        formatted_slug = slug

    slug_data: tuple[str, ...] = (item_id, content_type or item_type)
    locale = item.get("locale")
    if isinstance(locale, str) and locale in settings.locales and locale != settings.default_locale:
        slug_data = (*slug_data, locale)
    ctx.store.set_item("slugs", slug_data, f"/{slug}" if slug_is_html else formatted_slug)

    meta["isIndex"] = item["slug"] == "index"

    item_serverless_data = None
    if serverless_data is not None:
        if serverless_data.path != formatted_slug or serverless_data.query is None:
            return RenderItemResult(serverless_render=False)
        item_serverless_data = serverless_data

    item_data = dict(item)
    item_data.update(
        id=item_id,
        baseUrl=permalink,
        baseType=base_type,
        parents=resolved.parents,
        content=None,
    )

    content = item.get("content")
    content_output = ""
    if isinstance(content, str):
        content_output = content
    elif isinstance(content, list) and content:
        content_output = await render_content(
            content,
            page_data=item_data,
            page_contains=page_contains,
            page_headings=page_headings,
            navigations=navigations,
            serverless_data=item_serverless_data,
            preview_data=preview_data,
            context=ctx,
        )

    content_output = await ctx.shortcodes.do_shortcodes(content_output)

    pagination = item_data.get("pagination")
    if isinstance(pagination, Mapping):
        current_params = pagination.get("currentParams")
        prev_params = pagination.get("prevParams")
        next_params = pagination.get("nextParams")

        if isinstance(current_params, Mapping) and current_params:
            meta["canonicalParams"] = f"?{urlencode(current_params)}"
        if isinstance(pagination.get("title"), str) and pagination["title"]:
            meta["paginationTitle"] = pagination["title"]

        if pagination.get("prev"):
            prev_slug = get_slug(item["slug"], params=prev_params, return_parents=True, **slug_kwargs).slug
            meta["prev"] = get_permalink(prev_slug, pagination["prev"] == 1 and not prev_params, context=ctx)
        if pagination.get("next"):
            next_slug = get_slug(item["slug"], params=next_params, return_parents=True, **slug_kwargs).slug
            meta["next"] = get_permalink(next_slug, False, context=ctx)

        serverless_render = True

    layout_output = await maybe_await(
        ctx.render_functions.layout(
            LayoutArgs(
                id=item_id,
                meta=meta,
                content_type=item_type,
                content=content_output,
                slug=formatted_slug,
                item_data=item_data,
                page_contains=page_contains,
                page_headings=page_headings,
                navigations=navigations,
                serverless_data=serverless_data,
                preview_data=preview_data,
            )
        )
    )
    layout_output = layout_output if isinstance(layout_output, str) else ""

    def action_args(output: str) -> RenderItemActionArgs:
        return RenderItemActionArgs(
            id=item_id,
            content_type=item_type,
            item_data=item_data,
            slug=formatted_slug,
            output=output,
            page_contains=page_contains,
            page_headings=page_headings,
            serverless_data=serverless_data,
            preview_data=preview_data,
        )

    layout_output = await maybe_await(
        ctx.filters.apply_async(FilterName.RENDER_ITEM, layout_output, action_args(layout_output))
    )
    await maybe_await(ctx.actions.do_async(ActionName.RENDER_ITEM_END, action_args(layout_output)))

    return RenderItemResult(
        serverless_render=serverless_render,
        item_data=item_data,
        data=RenderData(slug=formatted_slug, output=layout_output),
    )


async def render(
    all_data: Any,
    *,
    serverless_data: ServerlessData | None = None,
    preview_data: PreviewData | None = None,
    context: RenderContext | None = None,
) -> list[RenderData] | RenderData:
    """Render every item of every content type in ``all_data``.

    Returns one :class:`RenderData` per page for a build. Serverless and
    preview requests return the single matching page, or the ``http_error``
    output with status 404 when nothing matches.
    """
    ctx = context or get_context()
    is_serverless = serverless_data is not None
    is_preview = preview_data is not None

    ctx.clear_assets()

    if not isinstance(all_data, Mapping):
        return []

    render_args = {"allData": all_data, "serverlessData": serverless_data, "previewData": preview_data}
    await maybe_await(ctx.actions.do_async(ActionName.RENDER_START, render_args))

    if not is_serverless:
        ctx.store.set_data(all_data, ctx.settings)

    navigations = None
    if callable(ctx.render_functions.navigation):
        navigations = await maybe_await(
            ctx.render_functions.navigation(
                navigations=ctx.store.navigations,
                items=ctx.store.navigation_items,
            )
        )

    set_redirects(all_data.get("redirect"), context=ctx)

    data: list[RenderData] = []
    content = all_data.get("content")

    for content_type, items in (content.items() if isinstance(content, Mapping) else ()):
        if not isinstance(items, list):
            continue

        for content_item in items:
            item_data_args = {"contentType": content_type}
            item = await maybe_await(
                ctx.filters.apply_async(FilterName.RENDER_ITEM_DATA, content_item, item_data_args)
            )
            result = await render_item(
                item,
                serverless_data=serverless_data,
                preview_data=preview_data,
                navigations=navigations,
                content_type=content_type,
                context=ctx,
            )
            if result is None or result.data is None:
                continue

            data.append(result.data)
            if result.serverless_render and not is_serverless:
                ctx.store.set_item("serverless", ["reload"], result.data.slug)

    output: list[RenderData] | RenderData = data
    if is_serverless or is_preview:
        if data:
            output = data[0]
        else:
            path = serverless_data.path if serverless_data is not None else ""
            logger.info("Nothing to render for %s, returning 404", path or "preview")
            error_output = await maybe_await(
                ctx.render_functions.http_error(
                    code=404,
                    serverless_data=serverless_data,
                    preview_data=preview_data,
                )
            )
            if not isinstance(error_output, str):
                error_output = ""
            output = RenderData(slug=path, output=error_output, status=404)

    await maybe_await(ctx.actions.do_async(ActionName.RENDER_END, {**render_args, "data": output}))
    return output


def render_sync(all_data: Any, **kwargs: Any) -> list[RenderData] | RenderData:
    """Blocking :func:`render` for synchronous callers."""
    kwargs.setdefault("context", get_context())
    return run_async_safely(render(all_data, **kwargs))
