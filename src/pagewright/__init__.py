"""pagewright: render normalized CMS content into static pages."""

from pagewright.assets import add_script, add_style, output_scripts, output_styles
from pagewright.config import RenderSettings
from pagewright.context import RenderContext, get_context, reset_context, set_context, use_context
from pagewright.exceptions import PagewrightError
from pagewright.hooks import ActionName, FilterName
from pagewright.hooks.api import (
    add_action,
    add_filter,
    apply_filters,
    apply_filters_async,
    apply_filters_sync,
    dispatch_actions,
    do_actions,
    do_actions_async,
    remove_action,
    remove_filter,
    reset_actions,
    reset_filters,
    set_actions,
    set_filters,
)
from pagewright.links import get_archive_link, get_link, get_permalink, get_slug
from pagewright.redirects import set_redirects
from pagewright.render import (
    render,
    render_content,
    render_inline_content,
    render_inline_item,
    render_item,
    render_sync,
    set_render_functions,
)
from pagewright.store import get_store_item, set_store_data, set_store_item

__version__ = "0.1.0"
__all__ = [
    "ActionName",
    "FilterName",
    "PagewrightError",
    "RenderContext",
    "RenderSettings",
    "add_action",
    "add_filter",
    "add_script",
    "add_style",
    "apply_filters",
    "apply_filters_async",
    "apply_filters_sync",
    "dispatch_actions",
    "do_actions",
    "do_actions_async",
    "get_archive_link",
    "get_context",
    "get_link",
    "get_permalink",
    "get_slug",
    "get_store_item",
    "output_scripts",
    "output_styles",
    "remove_action",
    "remove_filter",
    "render",
    "render_content",
    "render_inline_content",
    "render_inline_item",
    "render_item",
    "render_sync",
    "reset_actions",
    "reset_context",
    "reset_filters",
    "set_actions",
    "set_context",
    "set_filters",
    "set_redirects",
    "set_render_functions",
    "set_store_data",
    "set_store_item",
    "use_context",
]
