"""
HTML parsing and element selection via BeautifulSoup (lxml backend).
"""

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from site_archiver.config import (
    IMAGE_SELECTOR,
    MAIN_CONTENT_SELECTOR,
    PARAGRAPH_SEPARATOR,
    TITLE_SELECTOR,
    UNTITLED,
)
from site_archiver.result import ErrorKind, Result

_BS4_PARSER = "lxml"


def parse_html(html: str) -> Result[BeautifulSoup]:
    try:
        return Result.success(BeautifulSoup(html, _BS4_PARSER))
    except (ParserRejectedMarkup, ValueError) as exc:
        return Result.failure(ErrorKind.PARSE, str(exc))


def _unique(values) -> list[str]:
    """Deduplicate, keeping first-seen order."""
    return list(dict.fromkeys(values))


def anchor_hrefs(soup: BeautifulSoup) -> list[str]:
    """Every ``<a href>`` value in document order, deduplicated."""
    return _unique(a["href"] for a in soup.find_all("a", href=True))


def anchors(soup: BeautifulSoup) -> list[tuple[str, str]]:
    """``(href, stripped text)`` for every ``<a href>``."""
    return [(a["href"], a.get_text(strip=True)) for a in soup.find_all("a", href=True)]


def find_main_images(soup: BeautifulSoup) -> list[str]:
    """
    Return the ``src`` of representative images.

    Looks inside the main content container first; if it is missing or
    holds no matching image, the whole document is searched.
    """
    images: list[str] = []

    main = soup.select_one(MAIN_CONTENT_SELECTOR)
    if main is not None:
        images += [img["src"] for img in main.select(IMAGE_SELECTOR)]

    if not images:
        images += [img["src"] for img in soup.select(IMAGE_SELECTOR)]

    return _unique(images)


def extract_title(soup: BeautifulSoup) -> str:
    heading = soup.select_one(TITLE_SELECTOR)
    if heading is None:
        return UNTITLED
    return heading.get_text().strip()


def extract_description(soup: BeautifulSoup) -> str:
    return PARAGRAPH_SEPARATOR.join(p.get_text() for p in soup.find_all("p"))
