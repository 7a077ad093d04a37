"""
Archive writer – directories, section text files, failure lists and the
tag index.
"""

import logging
import re
import urllib.parse
from pathlib import Path
from typing import Iterable

from site_archiver.config import DEFAULT_IMAGE_EXTENSION, PARTIAL_SUFFIX
from site_archiver.models import FailedDownload, Section

log = logging.getLogger("site-archiver")

_UNSAFE_CHARS_RE = re.compile(r"[^0-9A-Za-z.\-]")


def sanitize_filename(name: str) -> str:
    """Replace every character outside ``[0-9A-Za-z.-]`` with ``_``."""
    return _UNSAFE_CHARS_RE.sub("_", name)


def ensure_dir(path: Path) -> Path:
    """``mkdir -p`` *path*; a no-op if it already exists."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def write_text(path: Path, content: str) -> None:
    """Write *content* to *path*, overwriting, creating parent directories."""
    ensure_dir(path.parent)
    path.write_text(content, encoding="utf-8")
    log.debug("Saved → %s (%d chars)", path, len(content))


def partial_path(path: Path) -> Path:
    """Sibling of *path* that holds the bytes of an unfinished download."""
    return path.with_name(path.name + PARTIAL_SUFFIX)


def stream_to_file(local_path: Path, chunks: Iterable[bytes]) -> int:
    """Write *chunks* to *local_path* and return the byte count.

    If the chunk source raises partway through, whatever was written is
    removed again before the error propagates.
    """
    ensure_dir(local_path.parent)
    total = 0
    try:
        with local_path.open("wb") as fh:
            for chunk in filter(None, chunks):
                total += fh.write(chunk)
    except Exception:
        local_path.unlink(missing_ok=True)
        raise
    log.debug("Streamed → %s (%d bytes)", local_path, total)
    return total


def image_extension(url: str) -> str:
    """Extension of the URL path (``.png``), or ``.jpg`` if it has none."""
    try:
        path = urllib.parse.urlparse(url).path
    except ValueError:
        return DEFAULT_IMAGE_EXTENSION
    suffix = Path(urllib.parse.unquote(path)).suffix
    return suffix or DEFAULT_IMAGE_EXTENSION


def image_filename(section_dir_name: str, index: int, url: str) -> str:
    """``{section}-{index}{ext}`` with a 1-based *index*."""
    return f"{section_dir_name}-{index}{image_extension(url)}"


def format_section_text(section: Section) -> str:
    """Title, blank line, description and an optional ``Tags:`` line."""
    lines = [section.title, "", section.text_content]
    if section.tags:
        lines.append(f"Tags: {', '.join(section.tags)}")
    return "\n".join(lines) + "\n"


def save_section_text(section: Section, section_dir: Path, filename: str) -> Path:
    path = section_dir / filename
    write_text(path, format_section_text(section))
    log.info("[SAVE] Saved text content to %s", path)
    return path


def write_failed_downloads(records: Iterable[FailedDownload], path: Path) -> Path:
    """One ``url,path`` line per record."""
    write_text(path, "".join(f"{rec.url},{rec.path}\n" for rec in records))
    return path


def write_tags(tags: Iterable[str], path: Path) -> Path:
    """Sorted, unique tags, one per line."""
    write_text(path, "".join(f"{tag}\n" for tag in sorted(set(tags))))
    return path
