"""Utility helpers for URL handling, logging and retries."""

from course_downloader.utils.log import setup_logging, log
from course_downloader.utils.retry import retry
from course_downloader.utils.url import (
    absolute_url,
    extract_course_id,
    extract_lesson_id,
    extract_video_id,
    is_valid_course_id,
    resolve_course_id,
)

__all__ = [
    "setup_logging",
    "log",
    "retry",
    "absolute_url",
    "extract_course_id",
    "extract_lesson_id",
    "extract_video_id",
    "is_valid_course_id",
    "resolve_course_id",
]
