"""
Tests for argument parsing and CLI wiring.
"""

import unittest
from unittest.mock import patch

from site_archiver import cli
from site_archiver.config import (
    DEFAULT_LOG_FILE,
    DEFAULT_OUTPUT,
    DEFAULT_START_URL,
    clamp_workers,
)


class TestParseArgs(unittest.TestCase):
    def test_defaults(self):
        args = cli.parse_args([])
        self.assertEqual(args.url, DEFAULT_START_URL)
        self.assertEqual(args.url, "http://loukiehoos.nl")
        self.assertEqual(args.output, DEFAULT_OUTPUT)
        self.assertEqual(args.output, "archive")
        self.assertEqual(args.retry_attempts, 3)
        self.assertEqual(args.retry_delay, 5.0)
        self.assertEqual(args.workers, 1)
        self.assertEqual(args.log_file, DEFAULT_LOG_FILE)
        self.assertTrue(args.progress)

    def test_positionals(self):
        args = cli.parse_args(["https://example.com", "out"])
        self.assertEqual(args.url, "https://example.com")
        self.assertEqual(args.output, "out")

    def test_invalid_attempts_rejected(self):
        with self.assertRaises(SystemExit):
            cli.parse_args(["--retry-attempts", "0"])

    def test_negative_delay_rejected(self):
        with self.assertRaises(SystemExit):
            cli.parse_args(["--retry-delay", "-1"])


class TestClampWorkers(unittest.TestCase):
    def test_bounds(self):
        self.assertEqual(clamp_workers(1), 1)
        self.assertEqual(clamp_workers(1000), 16)

    @patch("os.cpu_count", return_value=2)
    def test_auto(self, _):
        self.assertEqual(clamp_workers(0), 4)


class TestMain(unittest.TestCase):
    @patch("site_archiver.cli.clean_thumbnails")
    @patch("site_archiver.cli.Archiver")
    @patch("site_archiver.cli.setup_logging")
    def test_main_wires_archiver(self, mock_logging, mock_archiver, mock_clean):
        cli.main(["example.com", "out", "--retry-delay", "0", "--clean-thumbnails"])

        mock_logging.assert_called_once_with(debug=False, log_file=DEFAULT_LOG_FILE)
        kwargs = mock_archiver.call_args.kwargs
        self.assertEqual(str(kwargs["output_dir"]), "out")
        self.assertEqual(kwargs["downloader"].retry_delay, 0)
        self.assertEqual(kwargs["downloader"].retry_attempts, 3)
        mock_archiver.return_value.archive.assert_called_once_with("http://example.com")
        mock_clean.assert_called_once()

    @patch("site_archiver.cli.clean_thumbnails")
    @patch("site_archiver.cli.setup_logging")
    def test_clean_main(self, mock_logging, mock_clean):
        cli.clean_main(["my_archive", "--max-size", "2048"])
        args, kwargs = mock_clean.call_args
        self.assertEqual(str(args[0]), "my_archive")
        self.assertEqual(kwargs["max_size"], 2048)


if __name__ == "__main__":
    unittest.main()
