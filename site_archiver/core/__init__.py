"""Core archiver logic – crawler, downloader, orchestration and storage."""

from site_archiver.core.archiver import Archiver, ArchiveReport
from site_archiver.core.crawler import Crawler
from site_archiver.core.downloader import Downloader
from site_archiver.core.storage import sanitize_filename

__all__ = ["Archiver", "ArchiveReport", "Crawler", "Downloader", "sanitize_filename"]
