"""Archive and taxonomy lookups used to build links and listing labels."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, NamedTuple

from pagewright.context import RenderContext, get_context


@dataclass(frozen=True)
class ArchiveInfo:
    id: str = ""
    slug: str = ""
    title: str = ""
    content_type: str = ""
    singular: str = ""
    plural: str = ""

    @property
    def exists(self) -> bool:
        return bool(self.id and self.slug)


@dataclass(frozen=True)
class TaxonomyInfo:
    id: str = ""
    slug: str | Mapping[str, str] = ""
    title: str = ""
    primary_content_type: str = ""
    use_content_type_slug: bool = True
    is_page: bool = False

    def localized_slug(self, locale: str = "", default_locale: str = "") -> str:
        """The taxonomy slug for ``locale`` when the slug is a locale map."""
        if isinstance(self.slug, str):
            return self.slug
        for key in (locale, default_locale):
            value = self.slug.get(key) if key else None
            if isinstance(value, str) and value:
                return value
        return ""


class ArchiveLink(NamedTuple):
    title: str
    link: str


def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def normalize_content_type(content_type: str, *, context: RenderContext | None = None) -> str:
    if not isinstance(content_type, str) or not content_type:
        return ""
    normal_type = (context or get_context()).settings.normal_types.get(content_type)
    return normal_type if isinstance(normal_type, str) and normal_type else content_type


def _archive_entry(content_type: str, locale: str, ctx: RenderContext) -> Mapping[str, Any]:
    meta = ctx.store.archive_meta.get(content_type)
    if not isinstance(meta, Mapping):
        return {}

    for key in (locale, ctx.settings.default_locale):
        localized = meta.get(key) if key else None
        if isinstance(localized, Mapping):
            return localized

    return meta if "id" in meta or "slug" in meta else {}


def _configured_entry(content_type: str, locale: str, ctx: RenderContext) -> Any:
    configured = ctx.settings.archive_meta.get(content_type)
    if isinstance(configured, dict):
        return configured.get(locale) or configured.get(ctx.settings.default_locale)
    return configured


def get_archive_info(
    content_type: str, locale: str | None = None, *, context: RenderContext | None = None
) -> ArchiveInfo:
    """Archive page id, slug and title for ``content_type``.

    Pages never have an archive. A locale-specific entry wins over a plain
    one; missing entries produce empty strings.
    """
    ctx = context or get_context()
    content_type = normalize_content_type(content_type, context=ctx)
    if not content_type or content_type == "page":
        return ArchiveInfo()

    locale = locale or ""
    entry = _archive_entry(content_type, locale, ctx)
    configured = _configured_entry(content_type, locale, ctx)

    singular = _str(entry.get("singular")) or (configured.singular if configured else "")
    plural = _str(entry.get("plural")) or (configured.plural if configured else "")

    return ArchiveInfo(
        id=_str(entry.get("id")),
        slug=_str(entry.get("slug")),
        title=_str(entry.get("title")),
        content_type=_str(entry.get("contentType")) or "page",
        singular=singular,
        plural=plural,
    )


def get_taxonomy_info(
    content_type: str, item_data: Mapping[str, Any] | None, *, context: RenderContext | None = None
) -> TaxonomyInfo:
    """Taxonomy attributes of a taxonomy item, or of the taxonomy a term belongs to."""
    if not isinstance(item_data, Mapping):
        return TaxonomyInfo()

    taxonomy = item_data if content_type == "taxonomy" else item_data.get("taxonomy")
    if not isinstance(taxonomy, Mapping):
        return TaxonomyInfo()

    content_types = taxonomy.get("contentTypes")
    primary = taxonomy.get("contentType")
    if isinstance(content_types, list) and content_types:
        primary = content_types[0]

    use_type_slug = taxonomy.get("usePrimaryContentTypeSlug", taxonomy.get("useContentTypeSlug"))
    is_page = taxonomy.get("isPage")
    slug = taxonomy.get("slug")

    return TaxonomyInfo(
        id=_str(taxonomy.get("id")),
        slug=slug if isinstance(slug, str | Mapping) else "",
        title=_str(taxonomy.get("title")),
        primary_content_type=normalize_content_type(_str(primary), context=context),
        use_content_type_slug=use_type_slug if isinstance(use_type_slug, bool) else True,
        is_page=is_page if isinstance(is_page, bool) else False,
    )


def get_archive_link(
    content_type: str, item_data: Mapping[str, Any] | None = None, *, context: RenderContext | None = None
) -> ArchiveLink:
    """Title and permalink of the listing a content type or term belongs to.

    A term whose taxonomy renders as a page links to that taxonomy page.
    Otherwise the archive page of the (primary) content type is used, titled
    with its plural label when one is configured.
    """
    from pagewright.links.link import get_permalink, get_slug

    ctx = context or get_context()
    content_type = normalize_content_type(content_type, context=ctx)
    taxonomy = get_taxonomy_info(content_type, item_data, context=ctx)
    locale = _str(item_data.get("locale")) if isinstance(item_data, Mapping) else ""

    title = ""
    slug: str | None = None

    if content_type == "term" and taxonomy.is_page:
        slug = get_slug("", content_type=content_type, item_data=item_data, context=ctx)
        title = taxonomy.title

    use_archive_type = taxonomy.use_content_type_slug and bool(taxonomy.primary_content_type)
    if use_archive_type and (content_type == "taxonomy" or (content_type == "term" and not taxonomy.is_page)):
        content_type = taxonomy.primary_content_type

    archive = get_archive_info(content_type, locale, context=ctx)
    if archive.exists:
        slug = get_slug(archive.slug, id=archive.id, content_type=archive.content_type, context=ctx)
        title = archive.plural or archive.title

    return ArchiveLink(title=title, link=get_permalink(slug, context=ctx) if slug else "")


def get_content_type_labels(
    content_type: str,
    taxonomy: Mapping[str, Any] | None = None,
    *,
    context: RenderContext | None = None,
) -> tuple[str, str]:
    """Singular and plural labels for a content type, or a taxonomy's primary type.

    Returns:
        ``(singular, plural)``, ``("Post", "Posts")`` when nothing is configured

    """
    content_type_name = content_type
    if isinstance(taxonomy, Mapping):
        content_type_name = _str(taxonomy.get("contentType"))

    singular, plural = "Post", "Posts"
    if content_type_name:
        archive = get_archive_info(content_type_name, context=context)
        singular = archive.singular or singular
        plural = archive.plural or plural

    return singular, plural
