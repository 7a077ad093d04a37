"""
Command-line interface for the site archiver.
"""

import argparse
import logging
import time
from pathlib import Path

from site_archiver.cleaner import clean_thumbnails
from site_archiver.config import (
    DEFAULT_LOG_FILE,
    DEFAULT_OUTPUT,
    DEFAULT_START_URL,
    DEFAULT_WORKERS,
    RETRY_ATTEMPTS,
    RETRY_DELAY,
    THUMBNAIL_MAX_SIZE,
    clamp_workers,
)
from site_archiver.core.archiver import Archiver
from site_archiver.core.crawler import Crawler
from site_archiver.core.downloader import Downloader
from site_archiver.extraction.page import PageExtractor
from site_archiver.session import build_session
from site_archiver.utils.log import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Archive a single website: per-page text, representative "
                    "images and tags, saved as one directory per section.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m site_archiver\n"
            "  python -m site_archiver https://example.com my_archive\n"
            "  python -m site_archiver https://example.com --workers 4\n"
            "  python -m site_archiver https://example.com --retry-delay 1\n"
        ),
    )
    parser.add_argument(
        "url", nargs="?", default=DEFAULT_START_URL,
        help=f"Seed URL to crawl (default: {DEFAULT_START_URL})",
    )
    parser.add_argument(
        "output", nargs="?", default=DEFAULT_OUTPUT,
        help=f"Output directory (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--retry-attempts", type=int, default=RETRY_ATTEMPTS, metavar="N",
        help=f"Download attempts per image (default: {RETRY_ATTEMPTS})",
    )
    parser.add_argument(
        "--retry-delay", type=float, default=RETRY_DELAY, metavar="SECONDS",
        help=f"Fixed delay between download attempts (default: {RETRY_DELAY})",
    )
    parser.add_argument(
        "--workers", type=int, default=DEFAULT_WORKERS, metavar="N",
        help="Parallel image download workers, 0 = auto "
             f"(default: {DEFAULT_WORKERS}, sequential)",
    )
    parser.add_argument(
        "--clean-thumbnails", action="store_true",
        help="Remove small image files from the archive when done",
    )
    parser.add_argument(
        "--no-progress", dest="progress", action="store_false", default=True,
        help="Disable the crawl progress bar",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable verbose debug logging",
    )
    parser.add_argument(
        "--log-file", default=DEFAULT_LOG_FILE,
        help=f"Append logs to this file (default: {DEFAULT_LOG_FILE})",
    )
    args = parser.parse_args(argv)
    if args.retry_attempts < 1:
        parser.error("--retry-attempts must be at least 1")
    if args.retry_delay < 0:
        parser.error("--retry-delay cannot be negative")
    return args


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    log = setup_logging(debug=args.debug, log_file=args.log_file)
    if args.debug:
        logging.getLogger("urllib3").setLevel(logging.DEBUG)

    start_url = args.url
    if not start_url.startswith(("http://", "https://")):
        start_url = "http://" + start_url

    workers = clamp_workers(args.workers)
    if workers > 1:
        log.info("Downloading with %d workers", workers)

    session = build_session(pool_size=max(10, workers))
    extractor = PageExtractor(session=session, logger=log)
    downloader = Downloader(
        session=session,
        retry_attempts=args.retry_attempts,
        retry_delay=args.retry_delay,
        logger=log,
        workers=workers,
    )
    archiver = Archiver(
        output_dir=Path(args.output),
        downloader=downloader,
        crawler_factory=lambda url: Crawler(
            url, extractor=extractor, logger=log, progress=args.progress
        ),
        logger=log,
    )

    log.info("Script started. Archiving %s", start_url)
    t0 = time.monotonic()
    archiver.archive(start_url)
    if args.clean_thumbnails:
        clean_thumbnails(Path(args.output), logger=log)
    log.info("Script finished in %.1f s.", time.monotonic() - t0)


def clean_main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Remove thumbnail-sized images from an existing archive.",
    )
    parser.add_argument(
        "archive_dir", nargs="?", default=DEFAULT_OUTPUT,
        help=f"Archive directory (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--max-size", type=int, default=THUMBNAIL_MAX_SIZE, metavar="BYTES",
        help=f"Images smaller than this are removed (default: {THUMBNAIL_MAX_SIZE})",
    )
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args(argv)

    log = setup_logging(debug=args.debug)
    clean_thumbnails(Path(args.archive_dir), max_size=args.max_size, logger=log)


if __name__ == "__main__":
    main()
