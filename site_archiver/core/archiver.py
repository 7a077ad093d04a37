"""
Top-level orchestration: crawl, write sections, download images, then
run one retry pass over whatever failed.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from site_archiver.config import (
    ALL_TAGS_FILE,
    CONTENT_FILE,
    FAILED_DOWNLOADS_FILE,
    FAILED_DOWNLOADS_FINAL_FILE,
)
from site_archiver.core.crawler import Crawler
from site_archiver.core.downloader import Downloader
from site_archiver.core.storage import (
    ensure_dir,
    image_filename,
    sanitize_filename,
    save_section_text,
    write_failed_downloads,
    write_tags,
)
from site_archiver.models import FailedDownload, Section
from site_archiver.utils.log import get_logger


def _unique_name(name: str, used: set[str]) -> str:
    """*name*, or *name* with a numeric suffix if another section took it."""
    candidate, n = name, 1
    while candidate in used:
        n += 1
        candidate = f"{name}-{n}"
    used.add(candidate)
    return candidate


@dataclass
class ArchiveReport:
    sections: dict[str, Section] = field(default_factory=dict)
    failed: list[FailedDownload] = field(default_factory=list)
    still_failed: list[FailedDownload] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)


class Archiver:
    """
    Wires a :class:`Crawler` to a :class:`Downloader` and the archive
    writer.

    *crawler_factory* receives the start URL and returns an object with a
    ``run()`` method yielding the section mapping.
    """

    def __init__(
        self,
        output_dir: Path,
        downloader: Downloader | None = None,
        crawler_factory: Callable[[str], Crawler] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.output_dir = Path(output_dir)
        self.log = logger or get_logger()
        self.downloader = downloader or Downloader(logger=self.log)
        self.crawler_factory = crawler_factory or (
            lambda url: Crawler(url, logger=self.log)
        )

    def archive(self, start_url: str) -> ArchiveReport:
        self.log.info("Starting archiving process for %s", start_url)
        sections = self.crawler_factory(start_url).run()
        self.log.info("Crawling complete. Found %d sections", len(sections))

        report = ArchiveReport(sections=sections)
        report.failed = self.save_content(sections)

        if report.failed:
            self.log.info("[RETRY] Retrying %d failed downloads...", len(report.failed))
            report.still_failed = self.downloader.retry_failed(report.failed)
            self._log_final_results(report.still_failed)

        report.tags = sorted({tag for s in sections.values() for tag in s.tags})
        if report.tags:
            path = write_tags(report.tags, self.output_dir / ALL_TAGS_FILE)
            self.log.info("[TAG] Saved %d tags to %s", len(report.tags), path)

        self.log.info("Website archiving complete! Saved to: %s", self.output_dir)
        return report

    def save_content(self, sections: dict[str, Section]) -> list[FailedDownload]:
        """Write every section and run the main download pass."""
        ensure_dir(self.output_dir)
        jobs: list[tuple[str, Path]] = []
        used: set[str] = set()

        for name, section in sections.items():
            dir_name = _unique_name(sanitize_filename(name), used)
            section_dir = ensure_dir(self.output_dir / dir_name)
            for index, img_url in enumerate(section.images, start=1):
                jobs.append((img_url, section_dir / image_filename(dir_name, index, img_url)))
            save_section_text(section, section_dir, CONTENT_FILE)

        failed = self.downloader.download_all(jobs)
        if failed:
            path = write_failed_downloads(failed, self.output_dir / FAILED_DOWNLOADS_FILE)
            self.log.warning("[FAIL] Some downloads failed. Check %s for details.", path)
        return failed

    def _log_final_results(self, still_failed: list[FailedDownload]) -> None:
        if still_failed:
            path = write_failed_downloads(
                still_failed, self.output_dir / FAILED_DOWNLOADS_FINAL_FILE
            )
            self.log.warning(
                "[FAIL] %d downloads still failed after retries. See %s",
                len(still_failed), path,
            )
        else:
            self.log.info("All failed downloads were successfully retrieved on retry.")
