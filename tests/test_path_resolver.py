"""
Unit tests for PathResolver.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import os
import sys
import unittest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from handlr.core.errors import BadPath
from handlr.core.mime import MimeType
from handlr.core.path_resolver import PathResolver


class TestPathResolver(unittest.TestCase):
    def setUp(self):
        self.resolver = PathResolver()

    def test_plain_path(self):
        path = self.resolver.resolve("docs/notes.txt")
        self.assertFalse(path.is_url)
        self.assertEqual(str(path), "docs/notes.txt")

    def test_url(self):
        path = self.resolver.resolve("https://youtu.be/dQw4w9WgXcQ")
        self.assertTrue(path.is_url)
        self.assertEqual(path.scheme, "https")
        self.assertEqual(str(path), "https://youtu.be/dQw4w9WgXcQ")
        self.assertEqual(path.get_mime(), MimeType("x-scheme-handler/https"))

    def test_other_schemes(self):
        self.assertEqual(self.resolver.resolve("mailto:someone@example.com").get_mime(),
                         MimeType("x-scheme-handler/mailto"))

    def test_file_url_becomes_path(self):
        path = self.resolver.resolve("file:///tmp/some%20file.txt")
        self.assertFalse(path.is_url)
        self.assertEqual(str(path), "/tmp/some file.txt")
        self.assertEqual(str(self.resolver.resolve("file://localhost/etc/hosts")), "/etc/hosts")

    def test_file_url_with_remote_host(self):
        with self.assertRaises(BadPath):
            self.resolver.resolve("file://example.com/etc/hosts")

    def test_empty(self):
        with self.assertRaises(ValueError):
            self.resolver.resolve("")

    def test_relative_path_with_colon(self):
        path = self.resolver.resolve("./a:b")
        self.assertFalse(path.is_url)
        self.assertEqual(path.scheme, "file")


if __name__ == "__main__":
    unittest.main()
