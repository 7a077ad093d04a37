"""
Configuration constants for the site archiver.
"""

import os

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
DEFAULT_START_URL = "http://loukiehoos.nl"
DEFAULT_OUTPUT = "archive"
DEFAULT_LOG_FILE = "archive_log.txt"
DEFAULT_WORKERS = 1            # 1 = strictly sequential downloads

# Upper bound for --workers so a single origin is never flooded
_MAX_WORKERS = 16


def clamp_workers(requested: int) -> int:
    """Clamp a requested download worker count to ``[1, _MAX_WORKERS]``.

    ``0`` means auto: twice the CPU count, still capped.
    """
    if requested <= 0:
        requested = (os.cpu_count() or 1) * 2
    return max(1, min(requested, _MAX_WORKERS))


# ---------------------------------------------------------------------------
# Download retry policy
# ---------------------------------------------------------------------------
RETRY_ATTEMPTS = 3
RETRY_DELAY = 5.0              # seconds between attempts (fixed, not exponential)
REQUEST_TIMEOUT = 30

# Chunk size for streaming image bodies to disk (64 KiB)
STREAM_CHUNK = 65536

# ---------------------------------------------------------------------------
# User-Agent pool
# ---------------------------------------------------------------------------
USER_AGENTS = [
    # Chrome (Windows)
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
    # Chrome (macOS)
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
    # Chrome (Linux)
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
    # Firefox (Windows)
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:133.0) Gecko/20100101 Firefox/133.0",
    # Firefox (Linux)
    "Mozilla/5.0 (X11; Linux x86_64; rv:133.0) Gecko/20100101 Firefox/133.0",
    # Safari (macOS)
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.6 Safari/605.1.15",
]

# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------
# Path substrings identifying tag-listing pages; never fetched, never queued.
EXCLUDED_PATH_MARKERS = ("/tag/",)

# Schemes that are never fetched.
SKIPPED_SCHEMES = ("mailto:",)

MAIN_CONTENT_SELECTOR = "div#main.box, div#content"
IMAGE_SELECTOR = 'img[src*="default"]'
TITLE_SELECTOR = "h1, h2, h3"
UNTITLED = "Untitled"
PARAGRAPH_SEPARATOR = "\n\n"

# ---------------------------------------------------------------------------
# Archive layout
# ---------------------------------------------------------------------------
CONTENT_FILE = "content.txt"
FAILED_DOWNLOADS_FILE = "failed_downloads.txt"
FAILED_DOWNLOADS_FINAL_FILE = "failed_downloads_final.txt"
ALL_TAGS_FILE = "all_tags.txt"

# Used when an image URL path carries no extension.
DEFAULT_IMAGE_EXTENSION = ".jpg"

# In-progress downloads; renamed into place once complete.
PARTIAL_SUFFIX = ".part"

# ---------------------------------------------------------------------------
# Thumbnail cleanup
# ---------------------------------------------------------------------------
THUMBNAIL_MAX_SIZE = 10 * 1024  # bytes
THUMBNAIL_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif"})
