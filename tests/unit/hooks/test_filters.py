import asyncio
import inspect
from dataclasses import dataclass

import pytest

from pagewright.hooks import FilterName, FilterRegistry
from pagewright.hooks.api import (
    add_filter,
    apply_filters,
    apply_filters_async,
    apply_filters_sync,
    remove_filter,
    reset_filters,
    set_filters,
)


@pytest.fixture
def filters() -> FilterRegistry:
    return FilterRegistry()


def test_reset_restores_enumerated_names(filters):
    filters.add(FilterName.RICH_TEXT_OUTPUT, lambda value, args: value)
    filters.add("custom", lambda value, args: value)

    filters.reset()

    assert len(filters) == 23
    assert set(filters) == {str(name) for name in FilterName}
    assert all(filters[name] == () for name in filters)


@pytest.mark.parametrize(
    ("name", "callback"),
    [
        ("", lambda value, args: value),
        (None, lambda value, args: value),
        (3, lambda value, args: value),
        ("slug", None),
        ("slug", "not callable"),
    ],
)
def test_add_rejects_bad_arguments(filters, name, callback):
    assert filters.add(name, callback) is False
    assert filters.callbacks("slug") == ()


def test_add_unknown_name_is_stored_but_never_applied(filters):
    assert filters.add("somethingElse", lambda value, args: value + 1)
    assert "somethingElse" in filters
    assert filters.apply_sync("slug", 1) == 1


def test_same_callback_registered_once(filters):
    def upper(value, args):
        return value.upper()

    filters.add("slug", upper)
    filters.add("slug", upper)

    assert filters.callbacks("slug") == (upper,)


def test_remove(filters):
    def noop(value, args):
        return value

    filters.add("slug", noop)

    assert filters.remove("slug", noop) is True
    assert filters.remove("slug", noop) is False
    assert filters.remove("unknown", noop) is False


@dataclass
class Suffix:
    suffix: str

    def __call__(self, value, args):
        return value + self.suffix


def test_unhashable_callbacks(filters):
    callback = Suffix("-x")

    assert filters.add("slug", callback) is True
    assert filters.add("slug", callback) is True
    assert filters.callbacks("slug") == (callback,)
    assert filters.apply_sync("slug", "a") == "a-x"

    assert filters.remove("slug", callback) is True
    assert filters.remove("slug", callback) is False
    assert filters.callbacks("slug") == ()


def test_apply_sync_composes_left_to_right(filters):
    filters.add("slug", lambda value, args: value + "-a")
    filters.add("slug", lambda value, args: value + "-b")

    assert filters.apply_sync("slug", "x") == "x-a-b"


def test_apply_sync_passes_args_to_every_callback(filters):
    seen = []
    filters.add("slug", lambda value, args: seen.append(args) or value)
    filters.add("slug", lambda value, args: seen.append(args) or value)

    filters.apply_sync("slug", "x", {"id": "1"})

    assert seen == [{"id": "1"}, {"id": "1"}]


def test_apply_without_callbacks_returns_same_object(filters):
    value = {"a": 1}

    assert filters.apply_sync("renderItem", value) is value
    result = filters.apply_async("renderItem", value)
    assert result is value
    assert not inspect.isawaitable(result)


@pytest.mark.asyncio
async def test_apply_async_awaits_each_callback_in_order(filters):
    calls = []

    async def slow(value, args):
        await asyncio.sleep(0.02)
        calls.append("slow")
        return value + ["slow"]

    def fast(value, args):
        calls.append("fast")
        return value + ["fast"]

    filters.add("renderContent", slow)
    filters.add("renderContent", fast)

    result = await filters.apply_async("renderContent", [])

    assert result == ["slow", "fast"]
    assert calls == ["slow", "fast"]


@pytest.mark.asyncio
async def test_apply_selects_path_with_flag(filters):
    filters.add("slug", lambda value, args: value * 2)

    assert filters.apply("slug", 2) == 4
    assert await filters.apply("slug", 2, is_async=True) == 4


def test_set_replaces_registrations(filters):
    filters.add("slug", lambda value, args: "old")

    assert filters.set({"slug": lambda value, args: "new", "slugParts": None}) is True
    assert filters.apply_sync("slug", "") == "new"
    assert filters.callbacks("slugParts") == ()


@pytest.mark.parametrize("value", [{}, [], None, "slug"])
def test_set_rejects_empty_or_non_mapping(filters, value):
    callback = lambda value, args: value  # noqa: E731
    filters.add("slug", callback)

    assert filters.set(value) is False
    assert filters.callbacks("slug") == (callback,)


def test_getitem_unknown_name_raises(filters):
    with pytest.raises(KeyError):
        filters["nope"]


def test_module_functions_use_active_context(render_context):
    def suffix(value, args):
        return f"{value}!"

    assert add_filter("slug", suffix)
    assert render_context.filters.callbacks("slug") == (suffix,)
    assert apply_filters_sync("slug", "hi") == "hi!"
    assert apply_filters("slug", "hi") == "hi!"

    assert remove_filter("slug", suffix)
    assert apply_filters_async("slug", "hi") == "hi"

    set_filters({"slug": suffix})
    reset_filters()
    assert len(render_context.filters) == 23
