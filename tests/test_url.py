"""
Tests for URL resolution, host scoping and section keys.
"""

import unittest

from site_archiver.result import ErrorKind
from site_archiver.utils.url import (
    base_url,
    is_excluded,
    is_skipped_scheme,
    last_segment,
    resolve_url,
    same_host,
    section_key,
)


class TestBaseUrl(unittest.TestCase):
    def test_strips_path_and_query(self):
        self.assertEqual(
            base_url("http://example.com/blog/post?x=1"), "http://example.com"
        )

    def test_keeps_port(self):
        self.assertEqual(base_url("https://example.com:8443/"), "https://example.com:8443")


class TestResolveUrl(unittest.TestCase):
    PAGE = "http://example.com/blog/post.html"

    def test_root_relative(self):
        res = resolve_url("/a", self.PAGE)
        self.assertTrue(res.ok)
        self.assertEqual(res.value, "http://example.com/a")

    def test_relative_to_page(self):
        res = resolve_url("../images/logo.png", self.PAGE)
        self.assertEqual(res.value, "http://example.com/images/logo.png")

    def test_fragment_dropped(self):
        res = resolve_url("/a#top", self.PAGE)
        self.assertEqual(res.value, "http://example.com/a")

    def test_absolute_unchanged(self):
        res = resolve_url("http://other.com/c", self.PAGE)
        self.assertEqual(res.value, "http://other.com/c")

    def test_empty_is_resolve_failure(self):
        res = resolve_url("   ", self.PAGE)
        self.assertFalse(res.ok)
        self.assertEqual(res.error.kind, ErrorKind.RESOLVE)

    def test_malformed_ipv6_is_resolve_failure(self):
        res = resolve_url("http://[::1/broken", self.PAGE)
        self.assertFalse(res.ok)
        self.assertEqual(res.error.kind, ErrorKind.RESOLVE)


class TestSameHost(unittest.TestCase):
    BASE = "http://example.com"

    def test_same_host(self):
        self.assertTrue(same_host("http://example.com/a", self.BASE))

    def test_scheme_does_not_matter(self):
        self.assertTrue(same_host("https://example.com/a", self.BASE))

    def test_other_host(self):
        self.assertFalse(same_host("http://other.com/c", self.BASE))

    def test_subdomain_is_other_host(self):
        self.assertFalse(same_host("http://cdn.example.com/c", self.BASE))

    def test_mailto_has_no_host(self):
        self.assertFalse(same_host("mailto:x@y.com", self.BASE))


class TestExclusion(unittest.TestCase):
    def test_tag_path_excluded(self):
        self.assertTrue(is_excluded("http://example.com/tag/cats/"))

    def test_regular_path_not_excluded(self):
        self.assertFalse(is_excluded("http://example.com/tags-overview"))

    def test_custom_markers(self):
        self.assertTrue(is_excluded("http://example.com/page/2", ("/page/",)))

    def test_mailto_skipped(self):
        self.assertTrue(is_skipped_scheme("mailto:x@y.com"))
        self.assertFalse(is_skipped_scheme("http://example.com/mailto"))


class TestSectionKey(unittest.TestCase):
    def test_last_segment(self):
        self.assertEqual(section_key("http://example.com/gallery/summer"), "summer")

    def test_trailing_slash_ignored(self):
        self.assertEqual(section_key("http://example.com/gallery/summer/"), "summer")

    def test_root_maps_to_host(self):
        self.assertEqual(section_key("http://example.com/"), "example.com")
        self.assertEqual(section_key("http://example.com"), "example.com")

    def test_last_segment_decodes(self):
        self.assertEqual(last_segment("http://example.com/tag/red%20wine/"), "red wine")


if __name__ == "__main__":
    unittest.main()
