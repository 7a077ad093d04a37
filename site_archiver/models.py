"""Records shared by the extractor, crawler, downloader and archive writer."""

from dataclasses import dataclass, field
from typing import NamedTuple

from site_archiver.config import UNTITLED
from site_archiver.result import Failure


@dataclass
class Section:
    """One archived unit: every page whose URL maps to the same key."""

    title: str = UNTITLED
    images: list[str] = field(default_factory=list)
    text_content: str = ""
    tags: list[str] = field(default_factory=list)


@dataclass
class PageResult:
    """What the extractor produced for a single URL.

    ``title`` and ``description`` are ``None`` when the page contributed
    nothing (skipped, unreachable or unparseable); ``error`` then says why.
    """

    links: list[str] = field(default_factory=list)
    images: list[str] = field(default_factory=list)
    title: str | None = None
    description: str | None = None
    tags: list[str] = field(default_factory=list)
    error: Failure | None = None

    @classmethod
    def empty(cls, error: Failure | None = None) -> "PageResult":
        return cls(error=error)


class FailedDownload(NamedTuple):
    url: str
    path: str
