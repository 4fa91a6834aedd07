import copy

import pytest

from pagewright.assets import add_script, output_scripts
from pagewright.links import SlugParent
from pagewright.render import (
    RenderData,
    RenderItemActionArgs,
    RenderItemResult,
    ServerlessData,
    render_item,
    set_render_functions,
)
from pagewright.shortcodes import Shortcode


@pytest.fixture
def blog(render_context):
    render_context.store.archive_meta["post"] = {
        "id": "archive-1",
        "slug": "blog",
        "title": "Blog",
        "contentType": "page",
    }


def make_post(**extra):
    return {
        "id": "post-1",
        "contentType": "post",
        "slug": "hello",
        "title": "Hello",
        "content": [{"renderType": "text", "text": "hi"}],
        **extra,
    }


@pytest.mark.asyncio
class TestRenderItemValidation:
    @pytest.mark.parametrize(
        "item",
        [
            None,
            "post",
            {"id": "1", "slug": "a"},
            {"contentType": "post", "slug": "a"},
            {"contentType": "post", "id": "1"},
            {"contentType": "post", "id": 1, "slug": "a"},
            {"contentType": "taxonomy", "id": "1", "slug": "topics"},
        ],
    )
    async def test_invalid_items_return_none(self, render_functions, item):
        assert await render_item(item) is None

    async def test_taxonomy_page_renders(self, render_functions):
        result = await render_item({"contentType": "taxonomy", "id": "1", "slug": "topics", "isPage": True})

        assert result.data.slug == "/topics/"


@pytest.mark.asyncio
class TestRenderItem:
    async def test_renders_through_layout(self, render_functions, blog):
        result = await render_item(make_post())

        assert result.serverless_render is False
        assert result.data == RenderData(
            slug="/blog/hello/",
            output="<html><title>Hello</title><main><p>hi</p></main></html>",
        )

    async def test_canonical_item_is_not_mutated(self, render_functions, blog):
        item = make_post()
        original = copy.deepcopy(item)

        result = await render_item(item)

        assert item == original
        assert result.item_data is not item

    async def test_item_data_for_layout(self, render_context, blog, layouts):
        await render_item(make_post())

        args = layouts[0]
        assert args.item_data["baseUrl"] == "/blog/hello/"
        assert args.item_data["baseType"] == "post"
        assert args.item_data["content"] is None
        assert args.item_data["parents"] == [
            SlugParent(id="archive-1", slug="blog", title="Blog", content_type="page")
        ]
        assert args.slug == "/blog/hello/"
        assert args.content == "<p>hi</p>"
        assert args.page_contains == {"text"}

    async def test_meta(self, render_context, blog, layouts):
        await render_item(
            make_post(
                metaTitle="Meta title",
                metaDescription="About hello",
                metaImage={"url": "https://img.example.com/a.png"},
                meta={"robots": "noindex"},
            )
        )

        meta = layouts[0].meta
        assert meta["title"] == "Meta title"
        assert meta["description"] == "About hello"
        assert meta["image"] == "https://img.example.com/a.png"
        assert meta["url"] == meta["canonical"] == "/blog/hello/"
        assert meta["robots"] == "noindex"
        assert meta["isIndex"] is False

    async def test_meta_title_falls_back_to_title(self, render_context, blog, layouts):
        await render_item(make_post())

        assert layouts[0].meta["title"] == "Hello"

    async def test_index_page(self, render_context, layouts):
        result = await render_item({"id": "home", "contentType": "page", "slug": "index", "content": "Home"})

        assert result.data.slug == "/"
        assert layouts[0].meta["isIndex"] is True
        assert layouts[0].meta["url"] == "/"
        assert render_context.store.slugs["/"] == ("home", "page")

    async def test_html_slug(self, render_context, render_functions):
        result = await render_item({"id": "feed", "contentType": "page", "slug": "feed.html"})

        assert result.data.slug == "feed.html"
        assert render_context.store.slugs["/feed.html"] == ("feed", "page")

    async def test_slug_store_records_non_default_locale(self, render_context, render_functions):
        render_context.settings.locales = ["en-US", "fr-CA"]

        await render_item({"id": "a", "contentType": "page", "slug": "a", "locale": "en-US"})
        await render_item({"id": "b", "contentType": "page", "slug": "b", "locale": "fr-CA"})
        await render_item({"id": "c", "contentType": "page", "slug": "c"}, content_type="pages")

        assert render_context.store.slugs["/a/"] == ("a", "page")
        assert render_context.store.slugs["/b/"] == ("b", "page", "fr-CA")
        assert render_context.store.slugs["/c/"] == ("c", "pages")

    async def test_string_content_is_used_as_is(self, render_functions):
        item = {"id": "a", "contentType": "page", "slug": "a", "title": "A", "content": "<b>x</b>"}

        result = await render_item(item)

        assert "<main><b>x</b></main>" in result.data.output

    async def test_shortcodes_are_expanded(self, render_context, render_functions):
        render_context.shortcodes.add("year", Shortcode(callback=lambda data: "2024"))

        result = await render_item(
            {"id": "a", "contentType": "page", "slug": "a", "content": "Built in [year][/year]."}
        )

        assert "Built in 2024." in result.data.output

    async def test_hooks(self, render_context, render_functions, blog, mocker):
        start = mocker.Mock()
        end = mocker.AsyncMock()
        render_context.actions.add("renderItemStart", start)
        render_context.actions.add("renderItemEnd", end)
        render_context.filters.add("renderItem", lambda output, args: f"<!-- {args.id} -->{output}")

        result = await render_item(make_post())

        assert result.data.output.startswith("<!-- post-1 --><html>")
        start_args = start.call_args.args[0]
        assert isinstance(start_args, RenderItemActionArgs)
        assert start_args.id == "post-1"
        assert start_args.content_type == "post"
        end_args = end.await_args.args[0]
        assert end_args.output == result.data.output
        assert end_args.slug == "/blog/hello/"

    async def test_assets_are_reset_per_item(self, render_context):
        def tabs(args):
            add_script("tabs")
            return "<tabs/>"

        set_render_functions({"tabs": tabs}, lambda args: output_scripts("/"))
        add_script("stale")

        item = {"id": "a", "contentType": "page", "slug": "a", "content": [{"renderType": "tabs"}]}

        result = await render_item(item)

        assert result.data.output == '<script type="module" src="/js/tabs.js"></script>'


@pytest.mark.asyncio
class TestRenderItemServerless:
    async def test_other_path_is_skipped(self, render_functions, blog):
        result = await render_item(make_post(), serverless_data=ServerlessData(path="/blog/other/", query={}))

        assert result == RenderItemResult(serverless_render=False)

    async def test_path_without_query_is_skipped(self, render_functions, blog):
        result = await render_item(make_post(), serverless_data=ServerlessData(path="/blog/hello/"))

        assert result.data is None

    async def test_matching_path_renders(self, render_functions, blog):
        serverless_data = ServerlessData(path="/blog/hello/", query={"page": "2"})

        result = await render_item(make_post(), serverless_data=serverless_data)

        assert result.data.slug == "/blog/hello/"

    async def test_pagination_meta(self, render_context, layouts):
        item = {
            "id": "blog",
            "contentType": "page",
            "slug": "blog",
            "pagination": {
                "current": 2,
                "prev": 1,
                "next": 3,
                "title": "Page 2 of 3",
                "currentParams": {"page": "2"},
                "nextParams": {"page": "3"},
            },
        }

        result = await render_item(item)

        meta = layouts[0].meta
        assert result.serverless_render is True
        assert meta["canonicalParams"] == "?page=2"
        assert meta["paginationTitle"] == "Page 2 of 3"
        assert meta["prev"] == "/blog/"
        assert meta["next"] == "/blog/?page=3"

    async def test_pagination_on_index_page(self, render_context, layouts):
        item = {
            "id": "home",
            "contentType": "page",
            "slug": "index",
            "pagination": {"current": 1, "next": 2, "nextParams": {"page": "2"}},
        }

        await render_item(item)

        meta = layouts[0].meta
        assert meta["prev"] == ""
        assert meta["next"] == "/?page=2"
