"""
course_downloader.extraction
=============================
Sub-package for extracting resources and lesson links from page markup.

Public API
----------
    from course_downloader.extraction import parse_lesson_page, extract_lesson_links
"""

from .page_parser import (
    classify_document_link,
    classify_media_link,
    extract_lesson_links,
    parse_lesson_page,
)

__all__ = [
    "classify_document_link",
    "classify_media_link",
    "extract_lesson_links",
    "parse_lesson_page",
]
