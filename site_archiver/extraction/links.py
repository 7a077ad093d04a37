"""
Resolution and host-scoping of raw link, image and tag references.

Each reference is resolved on its own; one malformed href never empties
the rest of the page.
"""

import logging

from site_archiver.config import EXCLUDED_PATH_MARKERS
from site_archiver.utils.log import get_logger
from site_archiver.utils.url import is_excluded, last_segment, resolve_url, same_host


def resolve_links(
    hrefs: list[str],
    page_url: str,
    base: str,
    exclude_markers: tuple[str, ...] = EXCLUDED_PATH_MARKERS,
    logger: logging.Logger | None = None,
) -> list[str]:
    """
    Resolve *hrefs* to absolute same-host URLs.

    Unresolvable hrefs are dropped (debug-logged), as are off-host URLs
    and, when *exclude_markers* is non-empty, tag-listing URLs.
    """
    log = logger or get_logger()
    found: list[str] = []
    for href in hrefs:
        res = resolve_url(href, page_url)
        if not res.ok:
            log.debug("  Dropping link %s", res.error)
            continue
        url = res.value
        if not same_host(url, base):
            continue
        if exclude_markers and is_excluded(url, exclude_markers):
            continue
        found.append(url)
    return list(dict.fromkeys(found))


def resolve_images(
    srcs: list[str],
    page_url: str,
    base: str,
    logger: logging.Logger | None = None,
) -> list[str]:
    """Resolve image *srcs* to absolute same-host URLs; malformed ones are
    logged at warning level and dropped."""
    log = logger or get_logger()
    found: list[str] = []
    for src in srcs:
        res = resolve_url(src, page_url)
        if not res.ok:
            log.warning("Invalid image URL: %s", res.error)
            continue
        if same_host(res.value, base):
            found.append(res.value)
    return list(dict.fromkeys(found))


def resolve_tags(
    anchors: list[tuple[str, str]],
    page_url: str,
    markers: tuple[str, ...] = EXCLUDED_PATH_MARKERS,
) -> list[str]:
    """
    Tag names from anchors pointing at tag-listing pages.

    The anchor text is used; anchors without text fall back to the last
    segment of the tag URL.
    """
    tags: list[str] = []
    for href, text in anchors:
        res = resolve_url(href, page_url)
        if not res.ok or not is_excluded(res.value, markers):
            continue
        name = text.strip() or last_segment(res.value)
        if name:
            tags.append(name)
    return list(dict.fromkeys(tags))
