"""
Thumbnail cleanup for an existing archive.

Removes image files below a size threshold; these are almost always
thumbnails picked up alongside the representative images.
"""

import logging
from pathlib import Path

from site_archiver.config import THUMBNAIL_EXTENSIONS, THUMBNAIL_MAX_SIZE
from site_archiver.utils.log import get_logger


def is_image_file(path: Path) -> bool:
    return path.suffix.lower() in THUMBNAIL_EXTENSIONS


def clean_thumbnails(
    archive_dir: Path,
    max_size: int = THUMBNAIL_MAX_SIZE,
    logger: logging.Logger | None = None,
) -> list[Path]:
    """Delete image files under *archive_dir* smaller than *max_size* bytes.

    Returns the removed paths.  A file that cannot be removed is logged and
    skipped.
    """
    log = logger or get_logger()
    archive_dir = Path(archive_dir)
    removed: list[Path] = []

    log.info("Starting thumbnail cleanup in %s...", archive_dir)
    for path in sorted(archive_dir.rglob("*")):
        if not path.is_file() or not is_image_file(path):
            continue
        if path.stat().st_size >= max_size:
            continue
        log.info("[CLEAN] Removing thumbnail: %s", path)
        try:
            path.unlink()
        except OSError as exc:
            log.error("[ERR] Error removing file %s: %s", path, exc)
            continue
        removed.append(path)

    log.info("Thumbnail cleanup complete! Removed %d files.", len(removed))
    return removed
