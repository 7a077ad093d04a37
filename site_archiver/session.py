"""
HTTP session creation and page fetching.

Sessions carry:
* A pooled ``HTTPAdapter`` with transport-level retries disabled, so the
  downloader's own ``RETRY_ATTEMPTS`` is the only retry budget
* A randomised desktop User-Agent and browser-like ``Accept`` headers
"""

import random

import requests
from requests.adapters import HTTPAdapter

from site_archiver.config import REQUEST_TIMEOUT, USER_AGENTS
from site_archiver.result import ErrorKind, Result

_HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")


def build_session(pool_size: int = 10) -> requests.Session:
    """Return a ``requests.Session`` with keep-alive pooling and a
    randomised User-Agent."""
    session = requests.Session()
    adapter = HTTPAdapter(
        max_retries=0,
        pool_connections=pool_size,
        pool_maxsize=pool_size,
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update({
        "User-Agent": random.choice(USER_AGENTS),
        "Accept": (
            "text/html,application/xhtml+xml,application/xml;q=0.9,"
            "image/avif,image/webp,image/apng,*/*;q=0.8"
        ),
        "Accept-Language": "en-US,en;q=0.9,nl;q=0.8",
        "Accept-Encoding": "gzip, deflate",
        "Connection": "keep-alive",
    })
    return session


def fetch_page(
    session: requests.Session,
    url: str,
    timeout: float = REQUEST_TIMEOUT,
) -> Result[str]:
    """GET *url* and return its decoded HTML.

    Network errors, non-2xx statuses and non-HTML Content-Types all come
    back as ``FETCH`` failures.
    """
    try:
        resp = session.get(url, timeout=timeout, allow_redirects=True)
        resp.raise_for_status()
    except requests.RequestException as exc:
        return Result.failure(ErrorKind.FETCH, f"{url}: {exc}")

    content_type = resp.headers.get("Content-Type", "")
    ct = content_type.split(";")[0].strip().lower()
    if ct and ct not in _HTML_CONTENT_TYPES:
        return Result.failure(ErrorKind.FETCH, f"{url}: not HTML ({ct})")

    return Result.success(resp.text)
