"""
Tests for thumbnail cleanup.
"""

import logging
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from site_archiver.cleaner import clean_thumbnails, is_image_file


class TestCleanThumbnails(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.logger = logging.getLogger("site-archiver.test.cleaner")
        section = self.root / "summer"
        section.mkdir()
        (section / "summer-1.jpg").write_bytes(b"x" * 100)
        (section / "summer-2.PNG").write_bytes(b"x" * 50)
        (section / "summer-3.jpg").write_bytes(b"x" * 20 * 1024)
        (section / "content.txt").write_text("tiny")

    def tearDown(self):
        self._tmp.cleanup()

    def test_removes_small_images_only(self):
        removed = clean_thumbnails(self.root, logger=self.logger)
        self.assertEqual(
            sorted(p.name for p in removed), ["summer-1.jpg", "summer-2.PNG"]
        )
        self.assertTrue((self.root / "summer" / "summer-3.jpg").exists())
        self.assertTrue((self.root / "summer" / "content.txt").exists())

    def test_custom_threshold(self):
        removed = clean_thumbnails(self.root, max_size=60, logger=self.logger)
        self.assertEqual([p.name for p in removed], ["summer-2.PNG"])

    def test_unlink_error_logged_and_skipped(self):
        with patch.object(Path, "unlink", side_effect=PermissionError("locked")):
            with self.assertLogs(self.logger, level="ERROR"):
                removed = clean_thumbnails(self.root, logger=self.logger)
        self.assertEqual(removed, [])

    def test_is_image_file(self):
        self.assertTrue(is_image_file(Path("a.JPEG")))
        self.assertFalse(is_image_file(Path("a.webp")))


if __name__ == "__main__":
    unittest.main()
