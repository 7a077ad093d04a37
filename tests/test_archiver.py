"""
Tests for the archive orchestration: directory layout, failure files and
the retry pass.
"""

import logging
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock

import requests

from site_archiver.core.archiver import Archiver
from site_archiver.core.downloader import Downloader
from site_archiver.models import FailedDownload, Section


class FakeCrawler:
    def __init__(self, sections):
        self.sections = sections

    def run(self):
        return self.sections


class ArchiverTestCase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.out = Path(self._tmp.name) / "archive"
        self.logger = logging.getLogger("site-archiver.test.archiver")
        self.downloader = MagicMock(spec=Downloader)
        self.downloader.download_all.return_value = []
        self.downloader.retry_failed.return_value = []

    def tearDown(self):
        self._tmp.cleanup()

    def make_archiver(self, sections, downloader=None):
        return Archiver(
            output_dir=self.out,
            downloader=downloader or self.downloader,
            crawler_factory=lambda url: FakeCrawler(sections),
            logger=self.logger,
        )


class TestLayout(ArchiverTestCase):
    def test_section_dirs_and_content(self):
        sections = {
            "Summer: 2024": Section(
                title="Summer",
                images=["http://example.com/a/default.png", "http://example.com/b/default"],
                text_content="Sunny",
                tags=["beach"],
            ),
        }
        report = self.make_archiver(sections).archive("http://example.com")

        section_dir = self.out / "Summer__2024"
        self.assertTrue(section_dir.is_dir())
        self.assertEqual(
            (section_dir / "content.txt").read_text(encoding="utf-8"),
            "Summer\n\nSunny\nTags: beach\n",
        )
        jobs = list(self.downloader.download_all.call_args.args[0])
        self.assertEqual(
            jobs,
            [
                ("http://example.com/a/default.png", section_dir / "Summer__2024-1.png"),
                ("http://example.com/b/default", section_dir / "Summer__2024-2.jpg"),
            ],
        )
        self.assertEqual(report.tags, ["beach"])
        self.assertEqual((self.out / "all_tags.txt").read_text(encoding="utf-8"), "beach\n")

    def test_colliding_section_names_get_distinct_dirs(self):
        sections = {
            "a b": Section(title="First", images=["http://example.com/1/default.jpg"]),
            "a_b": Section(title="Second", images=["http://example.com/2/default.jpg"]),
        }
        self.make_archiver(sections).archive("http://example.com")

        self.assertEqual(
            (self.out / "a_b" / "content.txt").read_text(encoding="utf-8").splitlines()[0],
            "First",
        )
        self.assertEqual(
            (self.out / "a_b-2" / "content.txt").read_text(encoding="utf-8").splitlines()[0],
            "Second",
        )
        jobs = list(self.downloader.download_all.call_args.args[0])
        self.assertEqual(
            [path for _, path in jobs],
            [self.out / "a_b" / "a_b-1.jpg", self.out / "a_b-2" / "a_b-2-1.jpg"],
        )

    def test_no_failure_files_when_everything_downloads(self):
        self.make_archiver({"s": Section()}).archive("http://example.com")
        self.assertFalse((self.out / "failed_downloads.txt").exists())
        self.assertFalse((self.out / "failed_downloads_final.txt").exists())
        self.assertFalse((self.out / "all_tags.txt").exists())
        self.downloader.retry_failed.assert_not_called()


class TestFailureHandling(ArchiverTestCase):
    def test_failures_written_and_retried(self):
        record = FailedDownload("http://example.com/1.jpg", str(self.out / "s" / "s-1.jpg"))
        self.downloader.download_all.return_value = [record]
        self.downloader.retry_failed.return_value = []

        report = self.make_archiver({"s": Section(images=[record.url])}).archive("http://example.com")

        self.downloader.retry_failed.assert_called_once_with([record])
        self.assertEqual(
            (self.out / "failed_downloads.txt").read_text(encoding="utf-8"),
            f"{record.url},{record.path}\n",
        )
        self.assertFalse((self.out / "failed_downloads_final.txt").exists())
        self.assertEqual(report.failed, [record])
        self.assertEqual(report.still_failed, [])

    def test_survivors_written_to_final_file(self):
        record = FailedDownload("http://example.com/1.jpg", "archive/s/s-1.jpg")
        self.downloader.download_all.return_value = [record]
        self.downloader.retry_failed.return_value = [record]

        with self.assertLogs(self.logger, level="WARNING") as cm:
            report = self.make_archiver({"s": Section()}).archive("http://example.com")

        self.assertEqual(report.still_failed, [record])
        self.assertEqual(
            (self.out / "failed_downloads_final.txt").read_text(encoding="utf-8"),
            "http://example.com/1.jpg,archive/s/s-1.jpg\n",
        )
        self.assertTrue(any("still failed" in line for line in cm.output))

    def test_three_failed_attempts_end_up_in_failure_file(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("down")
        sleep = MagicMock()
        downloader = Downloader(
            session=session, retry_attempts=3, retry_delay=0, sleep=sleep, logger=self.logger,
        )
        url = "http://example.com/img/default-1.jpg"
        archiver = self.make_archiver({"gallery": Section(images=[url])}, downloader=downloader)

        report = archiver.archive("http://example.com")

        expected_path = self.out / "gallery" / "gallery-1.jpg"
        self.assertEqual(report.failed, [FailedDownload(url, str(expected_path))])
        self.assertEqual(
            (self.out / "failed_downloads.txt").read_text(encoding="utf-8"),
            f"{url},{expected_path}\n",
        )
        self.assertTrue((self.out / "failed_downloads_final.txt").exists())
        # 3 attempts in the main pass plus 3 in the retry pass
        self.assertEqual(session.get.call_count, 6)


if __name__ == "__main__":
    unittest.main()
