"""
Tests for URL helpers.
"""

import unittest

from course_downloader.utils.url import (
    absolute_url,
    extract_course_id,
    extract_lesson_id,
    extract_video_id,
    is_valid_course_id,
    resolve_course_id,
)


class TestExtractIds(unittest.TestCase):
    def test_course_id(self):
        self.assertEqual(
            extract_course_id("https://example.com/app/dashboard/courses/12345/lessons"),
            "12345",
        )
        self.assertEqual(extract_course_id("https://example.com/app/dashboard/cursos/99/aulas"), "99")
        self.assertEqual(extract_course_id("https://example.com/courses/77"), "77")

    def test_course_id_missing(self):
        self.assertIsNone(extract_course_id("https://example.com/app/dashboard"))

    def test_lesson_id(self):
        self.assertEqual(extract_lesson_id("/app/dashboard/courses/1/lessons/456"), "456")
        self.assertIsNone(extract_lesson_id("/app/dashboard/courses/1"))

    def test_video_id(self):
        self.assertEqual(extract_video_id("https://x/api/video/321/download/resumo"), "321")
        self.assertIsNone(extract_video_id("https://x/api/video/download/resumo"))


class TestCourseIdInput(unittest.TestCase):
    def test_is_valid_course_id(self):
        self.assertTrue(is_valid_course_id(" 123 "))
        self.assertFalse(is_valid_course_id("12a"))
        self.assertFalse(is_valid_course_id(""))

    def test_resolve_course_id(self):
        self.assertEqual(resolve_course_id("123"), "123")
        self.assertEqual(resolve_course_id("https://example.com/app/dashboard/courses/55/lessons"), "55")
        self.assertIsNone(resolve_course_id("not-a-course"))


class TestAbsoluteUrl(unittest.TestCase):
    def test_relative_path(self):
        self.assertEqual(
            absolute_url("/api/aluno/pdf/1", "https://example.com/app/lessons/2"),
            "https://example.com/api/aluno/pdf/1",
        )

    def test_absolute_unchanged(self):
        self.assertEqual(
            absolute_url("https://cdn.example.com/f.pdf", "https://example.com/"),
            "https://cdn.example.com/f.pdf",
        )


if __name__ == "__main__":
    unittest.main()
