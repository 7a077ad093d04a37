"""
Single-site crawler.

Discovers every same-host page reachable from a seed URL and folds what
the extractor finds on each page into :class:`Section` records keyed by
the last path segment of the page URL.

* The frontier is a stack: the most recently discovered URL is visited
  next.  Order differs from strict BFS; coverage does not.
* A URL is marked visited immediately before extraction and is never
  fetched again.
* A URL already visited or already queued is never pushed again.
* Tag-listing URLs are discarded when popped, before any fetch.
"""

import logging
from typing import Callable

from tqdm import tqdm

from site_archiver.config import EXCLUDED_PATH_MARKERS
from site_archiver.extraction.page import PageExtractor
from site_archiver.models import PageResult, Section
from site_archiver.utils.log import get_logger
from site_archiver.utils.url import base_url, is_excluded, same_host, section_key

Extractor = Callable[[str, str], PageResult]


class Crawler:
    """Stack-ordered crawler over a single host."""

    def __init__(
        self,
        start_url: str,
        extractor: Extractor | None = None,
        logger: logging.Logger | None = None,
        exclude_markers: tuple[str, ...] = EXCLUDED_PATH_MARKERS,
        progress: bool = False,
    ) -> None:
        self.start_url = start_url
        self.base = base_url(start_url)
        self.log = logger or get_logger()
        self.extractor = extractor or PageExtractor(logger=self.log)
        self.exclude_markers = exclude_markers
        self.progress = progress

        self._visited: set[str] = set()
        self._frontier: list[str] = []
        self._queued: set[str] = set()
        self._sections: dict[str, Section] = {}
        self._stats = {"pages": 0, "skipped": 0, "errors": 0}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def visited(self) -> frozenset[str]:
        return frozenset(self._visited)

    @property
    def frontier(self) -> tuple[str, ...]:
        return tuple(self._frontier)

    @property
    def sections(self) -> dict[str, Section]:
        return self._sections

    def run(self) -> dict[str, Section]:
        """Crawl until the frontier is empty and return the sections."""
        self.log.info("Target URL   : %s", self.start_url)
        self.log.info("Allowed host : %s", self.base)

        self._push(self.start_url)

        bar = tqdm(
            desc="Crawling",
            unit="page",
            dynamic_ncols=True,
            disable=not self.progress,
        )
        with bar:
            while self._frontier:
                url = self._pop()
                if self._step(url):
                    bar.update(1)
                bar.set_postfix(queued=len(self._frontier), refresh=False)

        self.log.info(
            "Crawling complete. Processed %d pages (skipped=%d errors=%d), "
            "%d sections.",
            len(self._visited),
            self._stats["skipped"],
            self._stats["errors"],
            len(self._sections),
        )
        return self._sections

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _push(self, url: str) -> bool:
        if url in self._visited or url in self._queued:
            return False
        if not same_host(url, self.base):
            return False
        self._frontier.append(url)
        self._queued.add(url)
        return True

    def _pop(self) -> str:
        url = self._frontier.pop()
        self._queued.discard(url)
        return url

    def _step(self, url: str) -> bool:
        """Process one popped URL.  Returns True if it was extracted."""
        if url in self._visited:
            return False
        if is_excluded(url, self.exclude_markers):
            self.log.debug("[SKIP] Excluded path: %s", url)
            self._stats["skipped"] += 1
            return False

        self._visited.add(url)
        self.log.info("Processing: %s", url)
        page = self.extractor(url, self.base)
        if page.error is not None:
            self._stats["errors"] += 1

        self._merge(section_key(url), page)

        added = sum(1 for link in page.links if self._push(link))
        self.log.info("[QUEUE] Added %d new links to visit", added)
        self._stats["pages"] += 1
        return True

    def _merge(self, key: str, page: PageResult) -> None:
        """Create or update the section for *key* from *page*.

        Images accumulate.  Title, text and tags follow the latest page
        that actually produced content.
        """
        section = self._sections.get(key)
        if section is None:
            section = Section()
            self._sections[key] = section

        section.images.extend(page.images)
        if page.title is not None:
            section.title = page.title
        if page.description is not None:
            section.text_content = page.description
            section.tags = list(page.tags)
