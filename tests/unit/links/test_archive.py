import pytest

from pagewright.config import ArchiveMetaSettings
from pagewright.links import (
    ArchiveInfo,
    ArchiveLink,
    get_archive_info,
    get_archive_link,
    get_content_type_labels,
    get_taxonomy_info,
    normalize_content_type,
)


TOPICS = {"id": "t", "slug": "topics", "title": "Topics", "contentType": "post", "isPage": True}


@pytest.fixture
def archive_meta(render_context):
    meta = render_context.store.archive_meta
    meta["post"] = {"id": "archive-1", "slug": "blog", "title": "Blog", "contentType": "page"}
    return meta


def test_normalize_content_type(render_context):
    render_context.settings.normal_types = {"posts": "post"}

    assert normalize_content_type("posts") == "post"
    assert normalize_content_type("page") == "page"
    assert normalize_content_type("") == ""


def test_archive_info_found(archive_meta):
    assert get_archive_info("post") == ArchiveInfo(
        id="archive-1", slug="blog", title="Blog", content_type="page"
    )


def test_archive_info_missing_is_empty(archive_meta):
    info = get_archive_info("event")

    assert info.id == info.slug == info.title == ""
    assert not info.exists


def test_page_never_has_archive(archive_meta):
    archive_meta["page"] = {"id": "x", "slug": "pages", "title": "Pages"}

    assert get_archive_info("page") == ArchiveInfo()


def test_archive_info_normalizes_type(render_context, archive_meta):
    render_context.settings.normal_types = {"posts": "post"}

    assert get_archive_info("posts").slug == "blog"


def test_locale_specific_archive_wins(render_context):
    render_context.settings.locales = ["en-US", "fr-CA"]
    render_context.store.archive_meta["post"] = {
        "en-US": {"id": "a-en", "slug": "blog", "title": "Blog"},
        "fr-CA": {"id": "a-fr", "slug": "blogue", "title": "Blogue"},
    }

    assert get_archive_info("post", "fr-CA").slug == "blogue"
    assert get_archive_info("post").slug == "blog"


def test_configured_labels(render_context, archive_meta):
    render_context.settings.archive_meta = {
        "post": ArchiveMetaSettings(singular="Article", plural="Articles"),
    }

    info = get_archive_info("post")

    assert (info.singular, info.plural) == ("Article", "Articles")
    assert get_content_type_labels("post") == ("Article", "Articles")


def test_content_type_labels_default(render_context):
    assert get_content_type_labels("event") == ("Post", "Posts")
    assert get_content_type_labels("") == ("Post", "Posts")


def test_content_type_labels_from_taxonomy(render_context, archive_meta):
    archive_meta["post"]["singular"] = "Entry"
    archive_meta["post"]["plural"] = "Entries"

    assert get_content_type_labels("term", {"contentType": "post"}) == ("Entry", "Entries")


class TestTaxonomyInfo:
    def test_term_reads_its_taxonomy(self):
        info = get_taxonomy_info(
            "term",
            {"taxonomy": TOPICS},
        )

        assert info.id == "t"
        assert info.slug == "topics"
        assert info.primary_content_type == "post"
        assert info.use_content_type_slug is True
        assert info.is_page is True

    def test_taxonomy_reads_itself_and_first_content_type(self, render_context):
        render_context.settings.normal_types = {"posts": "post"}

        taxonomy = {"id": "t", "contentTypes": ["posts", "event"], "useContentTypeSlug": False}

        info = get_taxonomy_info("taxonomy", taxonomy)

        assert info.primary_content_type == "post"
        assert info.use_content_type_slug is False

    @pytest.mark.parametrize("item", [None, {}, {"taxonomy": "topics"}])
    def test_missing_taxonomy(self, item):
        info = get_taxonomy_info("term", item)

        assert info.id == ""
        assert info.use_content_type_slug is True
        assert info.is_page is False

    def test_localized_slug(self):
        info = get_taxonomy_info("taxonomy", {"slug": {"en-US": "topics", "fr-CA": "sujets"}})

        assert info.localized_slug("fr-CA") == "sujets"
        assert info.localized_slug("de-DE", "en-US") == "topics"
        assert info.localized_slug("de-DE") == ""


class TestArchiveLink:
    def test_content_type_links_to_archive(self, archive_meta):
        assert get_archive_link("post") == ArchiveLink(title="Blog", link="/blog/")

    def test_plural_label_is_title(self, render_context, archive_meta):
        render_context.settings.archive_meta = {"post": ArchiveMetaSettings(plural="Articles")}

        assert get_archive_link("post").title == "Articles"

    def test_term_links_to_primary_type_archive(self, archive_meta):
        term = {"taxonomy": {"id": "t", "slug": "topics", "title": "Topics", "contentType": "post"}}

        assert get_archive_link("term", term) == ArchiveLink(title="Blog", link="/blog/")

    def test_term_with_taxonomy_page_links_to_taxonomy(self, archive_meta):
        term = {
            "contentType": "term",
            "taxonomy": TOPICS,
        }

        assert get_archive_link("term", term) == ArchiveLink(title="Topics", link="/blog/topics/")

    def test_no_archive(self, render_context):
        assert get_archive_link("event") == ArchiveLink(title="", link="")
