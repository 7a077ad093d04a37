"""
URL resolution, host scoping and section-key helpers.
"""

import urllib.parse

from site_archiver.config import EXCLUDED_PATH_MARKERS, SKIPPED_SCHEMES
from site_archiver.result import ErrorKind, Result


def base_url(start_url: str) -> str:
    """Return ``scheme://host`` for *start_url*; the crawl boundary."""
    parsed = urllib.parse.urlparse(start_url)
    return f"{parsed.scheme}://{parsed.netloc}"


def resolve_url(raw: str, page_url: str) -> Result[str]:
    """
    Join *raw* onto *page_url* and drop the fragment.

    Returns a ``RESOLVE`` failure for empty references and for anything
    ``urllib.parse`` rejects (e.g. an unterminated IPv6 literal).
    """
    raw = (raw or "").strip()
    if not raw:
        return Result.failure(ErrorKind.RESOLVE, "empty reference")
    try:
        joined = urllib.parse.urljoin(page_url, raw)
        absolute, _fragment = urllib.parse.urldefrag(joined)
        # Force host parsing so malformed netlocs surface here.
        urllib.parse.urlparse(absolute).hostname
    except ValueError as exc:
        return Result.failure(ErrorKind.RESOLVE, f"{raw!r}: {exc}")
    return Result.success(absolute)


def host_of(url: str) -> str | None:
    try:
        return urllib.parse.urlparse(url).hostname
    except ValueError:
        return None


def same_host(url: str, base: str) -> bool:
    """True when *url* has the same host name as *base*."""
    host = host_of(url)
    return host is not None and host == host_of(base)


def is_excluded(url: str, markers: tuple[str, ...] = EXCLUDED_PATH_MARKERS) -> bool:
    """True for tag-listing style URLs that are never fetched or queued."""
    return any(marker in url for marker in markers)


def is_skipped_scheme(url: str) -> bool:
    return url.startswith(SKIPPED_SCHEMES)


def section_key(url: str) -> str:
    """Last path segment of *url*; ``http://host/`` maps to ``host``."""
    return url.rstrip("/").rsplit("/", 1)[-1]


def last_segment(url: str) -> str:
    """Last non-empty segment of the URL *path* (no query)."""
    path = urllib.parse.urlparse(url).path
    return urllib.parse.unquote(path.rstrip("/").rsplit("/", 1)[-1])
