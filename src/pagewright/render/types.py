"""Shapes exchanged between the render engine and render functions.

Content items arrive as plain mappings decoded from CMS JSON, so their keys
keep the source's camelCase spelling. Everything the engine itself builds is
a dataclass.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypedDict


class RenderItem(TypedDict, total=False):
    """A node of the normalized content tree. Unlisted keys are allowed."""

    id: str
    contentType: str
    renderType: str
    name: str
    slug: str
    title: str
    locale: str
    content: list[RenderItem] | str
    parent: dict[str, Any]
    archive: str
    taxonomy: dict[str, Any]
    internalLink: dict[str, Any]
    metadata: dict[str, Any]
    meta: dict[str, Any]
    pagination: dict[str, Any]
    isPage: bool


@dataclass(frozen=True)
class ParentArgs:
    """An ancestor as seen by descendant render functions."""

    render_type: str
    args: Mapping[str, Any]


@dataclass(frozen=True)
class ServerlessData:
    path: str
    query: Mapping[str, str] | None = None


@dataclass(frozen=True)
class PreviewData:
    id: str
    content_type: str
    locale: str = ""


@dataclass
class RenderFunctionArgs:
    """Everything a render function receives for one item."""

    item_data: dict[str, Any]
    parents: tuple[ParentArgs, ...] = ()
    render_functions: RenderFunctions | None = None
    page_data: dict[str, Any] = field(default_factory=dict)
    page_contains: set[str] = field(default_factory=set)
    page_headings: list[list[Any]] = field(default_factory=list)
    navigations: Any = None
    serverless_data: ServerlessData | None = None
    preview_data: PreviewData | None = None
    headings: list[Any] | None = None
    children: list[Any] | None = None


@dataclass
class LayoutArgs:
    id: str
    meta: dict[str, Any]
    content_type: str
    content: str
    slug: str
    item_data: dict[str, Any]
    page_contains: set[str] = field(default_factory=set)
    page_headings: list[list[Any]] = field(default_factory=list)
    navigations: Any = None
    serverless_data: ServerlessData | None = None
    preview_data: PreviewData | None = None


@dataclass
class RenderItemActionArgs:
    """Passed to ``renderItemStart`` / ``renderItemEnd`` and the ``renderItem`` filter."""

    id: str
    content_type: str
    item_data: dict[str, Any]
    slug: str = ""
    output: str = ""
    page_contains: set[str] = field(default_factory=set)
    page_headings: list[list[Any]] = field(default_factory=list)
    serverless_data: ServerlessData | None = None
    preview_data: PreviewData | None = None


@dataclass
class RenderData:
    slug: str
    output: str
    status: int = 200


@dataclass
class RenderItemResult:
    serverless_render: bool = False
    item_data: dict[str, Any] | None = None
    data: RenderData | None = None


RenderOutput = str | tuple[str, str] | list[str]
RenderFunction = Callable[[RenderFunctionArgs], RenderOutput | Awaitable[RenderOutput]]
LayoutFunction = Callable[[LayoutArgs], str | Awaitable[str]]
NavigationFunction = Callable[..., Any]
HttpErrorFunction = Callable[..., str | Awaitable[str]]


def _empty_layout(args: LayoutArgs) -> str:
    return ""


def _empty_http_error(**kwargs: Any) -> str:
    return ""


@dataclass
class RenderFunctions:
    """The render-type dispatch table plus page-level callables."""

    functions: dict[str, RenderFunction] = field(default_factory=dict)
    layout: LayoutFunction = _empty_layout
    navigation: NavigationFunction | None = None
    http_error: HttpErrorFunction = _empty_http_error

    def get(self, render_type: str) -> RenderFunction | None:
        function = self.functions.get(render_type) if render_type else None
        return function if callable(function) else None
