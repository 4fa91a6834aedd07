"""Script and stylesheet dependencies collected while rendering.

Render functions call :func:`add_script` / :func:`add_style` for the assets
their markup needs. ``item`` holds the assets of the page being rendered and
is cleared before each page; ``build`` accumulates across the whole build.
The layout emits the tags with :func:`output_scripts` / :func:`output_styles`.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from pagewright.context import RenderContext

AssetKind = Literal["scripts", "styles"]


@dataclass
class AssetMap:
    """Output path to input path maps plus dependency edges."""

    extension: str
    item: dict[str, str] = field(default_factory=dict)
    build: dict[str, str] = field(default_factory=dict)
    deps: dict[str, set[str]] = field(default_factory=dict)
    meta: dict[str, Any] = field(default_factory=dict)

    def clear_item(self) -> None:
        self.item.clear()
        self.deps.clear()
        self.meta.clear()

    def ordered(self) -> list[str]:
        """Item outputs with every dependency ahead of its dependents."""
        ordered: list[str] = []
        visiting: set[str] = set()

        def visit(output: str) -> None:
            if output in ordered or output in visiting:
                return
            visiting.add(output)
            for dep in sorted(self.deps.get(output, ())):
                if dep in self.item:
                    visit(dep)
            visiting.discard(output)
            ordered.append(output)

        for output in self.item:
            visit(output)

        return ordered


def _context(context: RenderContext | None) -> RenderContext:
    from pagewright.context import get_context

    return context or get_context()


def _add(kind: AssetKind, path: str, deps: Iterable[str] | None, context: RenderContext | None) -> bool:
    if not isinstance(path, str) or not path:
        return False

    ctx = _context(context)
    assets = ctx.scripts if kind == "scripts" else ctx.styles
    dirs = ctx.settings.scripts if kind == "scripts" else ctx.settings.styles

    def paths(name: str) -> tuple[str, str]:
        return f"{dirs.output_dir}/{name}", f"{dirs.input_dir}/{name}.{assets.extension}"

    output, source = paths(path)
    assets.item[output] = source
    assets.build[output] = source

    for dep in deps or ():
        if not isinstance(dep, str) or not dep:
            continue
        dep_output, dep_source = paths(dep)
        assets.deps.setdefault(output, set()).add(dep_output)
        assets.item[dep_output] = dep_source
        assets.build[dep_output] = dep_source

    return True


def add_script(path: str, deps: Iterable[str] | None = None, *, context: RenderContext | None = None) -> bool:
    return _add("scripts", path, deps, context)


def add_style(path: str, deps: Iterable[str] | None = None, *, context: RenderContext | None = None) -> bool:
    return _add("styles", path, deps, context)


def output_scripts(link: str, *, context: RenderContext | None = None) -> str:
    """``<script>`` tags for the current page, dependencies first."""
    if not isinstance(link, str) or not link:
        return ""

    return "".join(
        f'<script type="module" src="{link}{output}.js"></script>'
        for output in _context(context).scripts.ordered()
    )


def output_styles(link: str, *, context: RenderContext | None = None) -> str:
    """Stylesheet ``<link>`` tags for the current page, dependencies first."""
    if not isinstance(link, str) or not link:
        return ""

    return "".join(
        f'<link rel="stylesheet" href="{link}{output}.css" media="all">'
        for output in _context(context).styles.ordered()
    )
