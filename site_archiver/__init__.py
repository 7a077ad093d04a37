"""
site_archiver
=============
Crawl a single website from a seed URL and archive each section's text,
representative images and tags to a directory tree, retrying failed image
downloads with a fixed delay and a second pass over whatever still failed.

Package structure
-----------------
site_archiver/
├── __init__.py       – package init and public API
├── config.py         – configuration constants
├── result.py         – Result / Failure / ErrorKind values
├── models.py         – Section, PageResult, FailedDownload
├── session.py        – requests.Session factory and page fetching
├── cleaner.py        – thumbnail cleanup
├── cli.py            – argparse CLI (``python -m site_archiver``)
├── extraction/       – HTML parsing, link/image/tag resolution
├── core/             – crawler, downloader, archiver, storage
└── utils/            – URL helpers and logging setup

Quick start
-----------
    from pathlib import Path
    from site_archiver import Archiver

    Archiver(output_dir=Path("archive")).archive("http://example.com")
"""

from .core import Archiver, ArchiveReport, Crawler, Downloader
from .extraction import PageExtractor
from .models import FailedDownload, PageResult, Section
from .result import ErrorKind, Failure, Result
from .cleaner import clean_thumbnails

__all__ = [
    "Archiver",
    "ArchiveReport",
    "Crawler",
    "Downloader",
    "PageExtractor",
    "FailedDownload",
    "PageResult",
    "Section",
    "ErrorKind",
    "Failure",
    "Result",
    "clean_thumbnails",
]
