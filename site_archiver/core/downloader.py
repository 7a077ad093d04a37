"""
Image download pipeline.

* Idempotent: a file already on disk whose size matches the remote
  ``Content-Length`` is not fetched again.
* Each URL gets up to ``retry_attempts`` attempts with a fixed
  ``retry_delay`` between them (deliberate back-pressure, not exponential
  backoff).
* URLs that exhaust their attempts come back as :class:`FailedDownload`
  records so the orchestrator can run a second pass over exactly that set.
* With ``workers > 1`` the jobs run on a bounded thread pool; the retry
  contract stays per URL.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterable

import requests

from site_archiver.config import (
    REQUEST_TIMEOUT,
    RETRY_ATTEMPTS,
    RETRY_DELAY,
    STREAM_CHUNK,
)
from site_archiver.core.storage import partial_path, stream_to_file
from site_archiver.models import FailedDownload
from site_archiver.result import ErrorKind, Result
from site_archiver.session import build_session
from site_archiver.utils.log import get_logger


def _content_length(resp: requests.Response) -> int | None:
    raw = resp.headers.get("Content-Length")
    if raw is None or not raw.strip().isdigit():
        return None
    return int(raw)


class Downloader:
    """Fetches binary resources to disk with bounded, fixed-delay retries."""

    def __init__(
        self,
        session: requests.Session | None = None,
        retry_attempts: int = RETRY_ATTEMPTS,
        retry_delay: float = RETRY_DELAY,
        sleep: Callable[[float], None] = time.sleep,
        logger: logging.Logger | None = None,
        workers: int = 1,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        if retry_attempts < 1:
            raise ValueError("retry_attempts must be at least 1")
        self.session = session or build_session(pool_size=max(10, workers))
        self.retry_attempts = retry_attempts
        self.retry_delay = retry_delay
        self.sleep = sleep
        self.log = logger or get_logger()
        self.workers = max(1, workers)
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Single URL
    # ------------------------------------------------------------------

    def is_already_downloaded(self, url: str, path: Path) -> bool:
        """
        True when *path* exists and its size equals the remote
        ``Content-Length``.

        A missing header or any network error means "not confirmed", so
        the caller downloads again.
        """
        path = Path(path)
        if not path.is_file():
            return False
        try:
            with self.session.get(url, stream=True, timeout=self.timeout) as resp:
                resp.raise_for_status()
                remote_size = _content_length(resp)
        except requests.RequestException as exc:
            self.log.error("[ERR] Error checking file %s: %s", url, exc)
            return False

        if remote_size is None:
            self.log.debug("  No Content-Length for %s – re-downloading", url)
            return False
        return remote_size == path.stat().st_size

    def download(self, url: str, path: Path) -> Result[Path]:
        """One attempt at fetching *url* into *path*.

        The body goes to a ``.part`` sibling first; *path* is only replaced
        by a complete body.
        """
        path = Path(path)
        if self.is_already_downloaded(url, path):
            self.log.info("[SKIP] Already downloaded: %s", path)
            return Result.success(path)

        part = partial_path(path)
        try:
            with self.session.get(url, stream=True, timeout=self.timeout) as resp:
                resp.raise_for_status()
                expected = _content_length(resp)
                written = stream_to_file(part, resp.iter_content(STREAM_CHUNK))

            # Compressed transfers may legitimately differ from
            # Content-Length, so only a short body counts as truncated.
            if expected is not None and written < expected:
                part.unlink(missing_ok=True)
                return Result.failure(
                    ErrorKind.DOWNLOAD,
                    f"{url}: truncated ({written} of {expected} bytes)",
                )
            part.replace(path)
        except requests.RequestException as exc:
            return Result.failure(ErrorKind.DOWNLOAD, f"{url}: {exc}")
        except OSError as exc:
            if part.exists():
                part.unlink()
            return Result.failure(ErrorKind.DOWNLOAD, f"{path}: {exc}")

        self.log.info("[SAVE] Downloaded: %s to %s", url, path)
        return Result.success(path)

    def attempt_download(self, url: str, path: Path) -> bool:
        """Try :meth:`download` up to ``retry_attempts`` times, sleeping
        ``retry_delay`` between attempts (not after the last one)."""
        for attempt in range(1, self.retry_attempts + 1):
            result = self.download(url, path)
            if result.ok:
                return True
            self.log.error("[ERR] Error downloading image: %s", result.error.message)
            if attempt == self.retry_attempts:
                break
            self.log.warning(
                "[RETRY] Download attempt %d failed for %s. Retrying in %s seconds...",
                attempt, url, self.retry_delay,
            )
            self.sleep(self.retry_delay)
        self.log.warning("[FAIL] Giving up on %s after %d attempts", url, self.retry_attempts)
        return False

    # ------------------------------------------------------------------
    # Batches
    # ------------------------------------------------------------------

    def download_all(self, jobs: Iterable[tuple[str, Path]]) -> list[FailedDownload]:
        """Main pass.  Returns failed records in job order."""
        jobs = [(url, Path(path)) for url, path in jobs]
        if self.workers == 1 or len(jobs) <= 1:
            outcomes = [self.attempt_download(url, path) for url, path in jobs]
        else:
            with ThreadPoolExecutor(
                max_workers=self.workers, thread_name_prefix="download"
            ) as pool:
                outcomes = list(pool.map(lambda job: self.attempt_download(*job), jobs))

        return [
            FailedDownload(url, str(path))
            for (url, path), ok in zip(jobs, outcomes)
            if not ok
        ]

    def retry_failed(self, failed: Iterable[FailedDownload]) -> list[FailedDownload]:
        """Second pass over exactly the records that failed before."""
        failed = list(failed)
        for record in failed:
            self.log.info("[RETRY] Retrying download for %s", record.url)
        return self.download_all((rec.url, Path(rec.path)) for rec in failed)
