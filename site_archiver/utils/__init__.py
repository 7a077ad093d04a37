"""Utility helpers for URL handling and logging."""

from site_archiver.utils.url import (
    base_url,
    is_excluded,
    resolve_url,
    same_host,
    section_key,
)
from site_archiver.utils.log import get_logger, setup_logging

__all__ = [
    "base_url",
    "is_excluded",
    "resolve_url",
    "same_host",
    "section_key",
    "get_logger",
    "setup_logging",
]
