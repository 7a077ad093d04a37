"""Page extraction: HTML parsing, link/image resolution and tags."""

from site_archiver.extraction.page import PageExtractor
from site_archiver.extraction.links import resolve_images, resolve_links, resolve_tags

__all__ = ["PageExtractor", "resolve_images", "resolve_links", "resolve_tags"]
