import asyncio

import pytest

from pagewright.assets import add_script
from pagewright.config import RenderSettings
from pagewright.context import RenderContext, get_context, reset_context, set_context, use_context


def test_active_context_is_the_override(render_context):
    assert get_context() is render_context


def test_use_context_restores_previous(render_context):
    other = RenderContext()

    with use_context(other) as active:
        assert active is other
        assert get_context() is other

    assert get_context() is render_context


def test_reset_context_drops_override(render_context):
    settings = RenderSettings(title="Reset")

    context = reset_context(settings)

    assert context is not render_context
    assert get_context() is context
    assert context.settings.title == "Reset"


def test_default_context_is_reused():
    reset_context()

    assert get_context() is get_context()


def test_contexts_do_not_share_state():
    first = RenderContext()
    second = RenderContext()

    first.filters.add("slug", lambda value, args: value)
    first.store.slugs["/"] = ("home", "page")

    assert second.filters.callbacks("slug") == ()
    assert second.store.slugs == {}


def test_clear_assets(render_context):
    add_script("tabs")

    render_context.clear_assets()

    assert render_context.scripts.item == {}
    assert render_context.scripts.build == {"js/tabs": "src/tabs.js"}


@pytest.mark.asyncio
async def test_tasks_carry_their_own_context(render_context):
    async def worker(title: str) -> str:
        set_context(RenderContext(settings=RenderSettings(title=title)))
        await asyncio.sleep(0)
        return get_context().settings.title

    titles = await asyncio.gather(worker("one"), worker("two"))

    assert titles == ["one", "two"]
    assert get_context() is render_context
