"""Render engine and render-function dispatch."""

from pagewright.render.engine import render, render_content, render_item, render_sync, set_render_functions
from pagewright.render.inline import render_inline_content, render_inline_item
from pagewright.render.templates import ContentTemplate, get_content_template, map_content_template
from pagewright.render.types import (
    LayoutArgs,
    ParentArgs,
    PreviewData,
    RenderData,
    RenderFunctionArgs,
    RenderFunctions,
    RenderItem,
    RenderItemActionArgs,
    RenderItemResult,
    ServerlessData,
)

__all__ = [
    "ContentTemplate",
    "LayoutArgs",
    "ParentArgs",
    "PreviewData",
    "RenderData",
    "RenderFunctionArgs",
    "RenderFunctions",
    "RenderItem",
    "RenderItemActionArgs",
    "RenderItemResult",
    "ServerlessData",
    "get_content_template",
    "map_content_template",
    "render",
    "render_content",
    "render_inline_content",
    "render_inline_item",
    "render_item",
    "render_sync",
    "set_render_functions",
]
