"""Core engines – BFS course scanner, retrieval queue and file storage."""

from course_downloader.core.scanner import CourseScanner, CrawlState
from course_downloader.core.retrieval import (
    QueueStatus,
    RetrievalQueue,
    RetrievalResult,
    RunState,
    batch_download,
)
from course_downloader.core.storage import DiskSaver, sanitize_filename

__all__ = [
    "CourseScanner",
    "CrawlState",
    "QueueStatus",
    "RetrievalQueue",
    "RetrievalResult",
    "RunState",
    "batch_download",
    "DiskSaver",
    "sanitize_filename",
]
