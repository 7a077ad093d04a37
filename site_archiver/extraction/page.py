"""
Per-page extraction: fetch, parse, then collect links, representative
images, title, description and tags.
"""

import logging

import requests

from site_archiver.config import EXCLUDED_PATH_MARKERS, REQUEST_TIMEOUT
from site_archiver.extraction.html_parser import (
    anchor_hrefs,
    anchors,
    extract_description,
    extract_title,
    find_main_images,
    parse_html,
)
from site_archiver.extraction.links import resolve_images, resolve_links, resolve_tags
from site_archiver.models import PageResult
from site_archiver.result import ErrorKind, Failure
from site_archiver.session import build_session, fetch_page
from site_archiver.utils.log import get_logger
from site_archiver.utils.url import is_excluded, is_skipped_scheme


class PageExtractor:
    """
    Turns a URL into a :class:`PageResult`.

    Never raises for fetch or parse problems: the page simply contributes
    nothing and the failure is attached to the result.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        logger: logging.Logger | None = None,
        exclude_markers: tuple[str, ...] = EXCLUDED_PATH_MARKERS,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.session = session or build_session()
        self.log = logger or get_logger()
        self.exclude_markers = exclude_markers
        self.timeout = timeout

    def __call__(self, url: str, base: str) -> PageResult:
        return self.extract(url, base)

    def extract(self, url: str, base: str) -> PageResult:
        if is_skipped_scheme(url) or is_excluded(url, self.exclude_markers):
            self.log.debug("[SKIP] Not fetching %s", url)
            return PageResult.empty(Failure(ErrorKind.SKIPPED, url))

        fetched = fetch_page(self.session, url, timeout=self.timeout)
        if not fetched.ok:
            self.log.error("[ERR] Error processing page %s", fetched.error.message)
            return PageResult.empty(fetched.error)

        parsed = parse_html(fetched.value)
        if not parsed.ok:
            self.log.error("[ERR] Error parsing page %s: %s", url, parsed.error)
            return PageResult.empty(parsed.error)
        soup = parsed.value

        links = resolve_links(
            anchor_hrefs(soup), url, base, self.exclude_markers, logger=self.log
        )
        images = resolve_images(find_main_images(soup), url, base, logger=self.log)
        tags = resolve_tags(anchors(soup), url, self.exclude_markers)

        result = PageResult(
            links=links,
            images=images,
            title=extract_title(soup),
            description=extract_description(soup),
            tags=tags,
        )
        self.log.info(
            "Processed page: %s, Found %d links and %d images",
            url, len(links), len(images),
        )
        if tags:
            self.log.debug("  [TAG] %s", ", ".join(tags))
        return result
