"""
Tests for session construction and the HTTP page fetcher.
"""

import unittest
from unittest.mock import MagicMock

import requests

from course_downloader.errors import FetchFailure
from course_downloader.session import PageFetcher, build_session

URL = "https://example.com/app/dashboard/courses/1/lessons"


class TestBuildSession(unittest.TestCase):
    def test_defaults(self):
        session = build_session()
        self.assertTrue(session.verify)
        self.assertIn("Mozilla", session.headers["User-Agent"])
        self.assertNotIn("Cookie", session.headers)

    def test_cookie_and_ssl(self):
        session = build_session(verify_ssl=False, cookie=" sid=abc; csrftoken=x ")
        self.assertFalse(session.verify)
        self.assertEqual(session.headers["Cookie"], "sid=abc; csrftoken=x")

    def test_retry_adapter_mounted(self):
        adapter = build_session().get_adapter("https://example.com")
        self.assertEqual(adapter.max_retries.status_forcelist, [500, 502, 503, 504])


class TestPageFetcher(unittest.TestCase):
    def test_returns_text(self):
        session = MagicMock()
        session.get.return_value = MagicMock(ok=True, text="<html></html>")
        self.assertEqual(PageFetcher(session)(URL), "<html></html>")

    def test_http_error(self):
        session = MagicMock()
        session.get.return_value = MagicMock(ok=False, status_code=404, reason="Not Found")
        with self.assertRaises(FetchFailure) as ctx:
            PageFetcher(session)(URL)
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(ctx.exception.url, URL)

    def test_transport_error(self):
        session = MagicMock()
        session.get.side_effect = requests.Timeout("read timed out")
        with self.assertRaises(FetchFailure) as ctx:
            PageFetcher(session)(URL)
        self.assertIsNone(ctx.exception.status_code)


if __name__ == "__main__":
    unittest.main()
