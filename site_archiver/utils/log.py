"""
Logging configuration for the archiver.

Provides:
* ANSI colour highlights for ``[CATEGORY]`` tags on top of ``colorlog``
* GitHub Actions CI support (``::warning::``, ``::error::``)
* An append-only log file with timestamp and severity

``setup_logging`` returns the configured logger so the caller can hand it
to the crawler, extractor and downloader explicitly.
"""

import logging
import os
from pathlib import Path

import colorlog

LOGGER_NAME = "site-archiver"

_FILE_LOG_FMT = "%(asctime)s [%(levelname)s] %(message)s"
_FILE_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# ── Category colours ───────────────────────────────────────────────
_ANSI_RESET = "\033[0m"
_CATEGORY_STYLES: dict[str, str] = {
    "[SAVE]":  "\033[1;32m",
    "[SKIP]":  "\033[90m",
    "[RETRY]": "\033[36m",
    "[FAIL]":  "\033[1;31m",
    "[ERR]":   "\033[1;31m",
    "[QUEUE]": "\033[37m",
    "[TAG]":   "\033[35m",
    "[CLEAN]": "\033[33m",
}


def _apply_category_styles(msg: str) -> str:
    """Inject ANSI colours for known ``[CATEGORY]`` tags in *msg*."""
    for tag, style in _CATEGORY_STYLES.items():
        if tag in msg:
            msg = msg.replace(tag, f"{style}{tag}{_ANSI_RESET}")
    return msg


def _running_in_ci() -> bool:
    return os.environ.get("GITHUB_ACTIONS") == "true"


def get_logger() -> logging.Logger:
    """Return the archiver's named logger (unconfigured unless
    :func:`setup_logging` has run)."""
    return logging.getLogger(LOGGER_NAME)


# ── Formatters ─────────────────────────────────────────────────────

class _TagHighlightMixin:
    """Colours ``[CATEGORY]`` tags in whatever the base formatter produced."""

    def format(self, record: logging.LogRecord) -> str:
        return _apply_category_styles(super().format(record))


class _ConsoleFormatter(_TagHighlightMixin, colorlog.ColoredFormatter):
    pass


class _CIFormatter(_TagHighlightMixin, logging.Formatter):
    """Prefixes warnings and errors with a GitHub Actions annotation
    command (``::warning::`` / ``::error::``)."""

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        if record.levelno >= logging.ERROR:
            return f"::error::{text}"
        if record.levelno >= logging.WARNING:
            return f"::warning::{text}"
        return text


def setup_logging(debug: bool = False, log_file: str | None = None) -> logging.Logger:
    """Configure and return the archiver logger.

    Parameters
    ----------
    debug : bool
        Enable DEBUG-level console output (default is INFO).
    log_file : str | None
        If given, also append log messages to this file path.
    """
    log = get_logger()
    log.setLevel(logging.DEBUG if debug else logging.INFO)
    for handler in list(log.handlers):
        handler.close()
    log.handlers.clear()
    log.propagate = False

    # -- Console handler --
    if _running_in_ci():
        handler = logging.StreamHandler()
        handler.setFormatter(_CIFormatter(
            "%(asctime)s [%(levelname)s] %(message)s", datefmt="%H:%M:%S"
        ))
    else:
        handler = colorlog.StreamHandler()
        handler.setFormatter(_ConsoleFormatter(
            "%(log_color)s%(asctime)s [%(levelname)s]%(reset)s %(message)s",
            datefmt="%H:%M:%S",
            log_colors={
                "DEBUG":    "cyan",
                "INFO":     "green",
                "WARNING":  "yellow",
                "ERROR":    "red",
                "CRITICAL": "bold_red",
            },
        ))
    log.addHandler(handler)

    # -- File handler (optional, appended) --
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_path), mode="a", encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(_FILE_LOG_FMT, datefmt=_FILE_LOG_DATEFMT))
        log.addHandler(fh)
        log.debug("Logging to file: %s", log_path.resolve())

    return log
