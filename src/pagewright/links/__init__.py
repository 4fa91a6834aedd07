"""Slug, permalink and archive link resolution."""

from pagewright.links.archive import (
    ArchiveInfo,
    ArchiveLink,
    TaxonomyInfo,
    get_archive_info,
    get_archive_link,
    get_content_type_labels,
    get_taxonomy_info,
    normalize_content_type,
)
from pagewright.links.link import SlugParent, SlugResult, get_link, get_permalink, get_slug

__all__ = [
    "ArchiveInfo",
    "ArchiveLink",
    "SlugParent",
    "SlugResult",
    "TaxonomyInfo",
    "get_archive_info",
    "get_archive_link",
    "get_content_type_labels",
    "get_link",
    "get_permalink",
    "get_slug",
    "get_taxonomy_info",
    "normalize_content_type",
]
