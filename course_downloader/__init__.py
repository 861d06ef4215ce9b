"""
course_downloader
=================
Discovers the downloadable materials of an online course and retrieves them.

Package structure
-----------------
course_downloader/
├── __init__.py       – package init and public API
├── config.py         – configuration constants
├── errors.py         – FetchFailure / ParseAnomaly / RetrievalFailure
├── models.py         – ResourceKind, ResourceDescriptor, derive_filename
├── progress.py       – callback signatures and tqdm reporters
├── session.py        – requests.Session factory and PageFetcher
├── cli.py            – argparse CLI (``python -m course_downloader``)
├── core/
│   ├── scanner.py    – BFS CourseScanner
│   ├── retrieval.py  – RetrievalQueue worker pool
│   └── storage.py    – DiskSaver and file helpers
├── extraction/
│   └── page_parser.py – lesson page → descriptors + lesson links
└── utils/            – logging, URL helpers, retry helper

Quick start
-----------
    from pathlib import Path
    from course_downloader import (
        CourseScanner, RetrievalQueue, DiskSaver, PageFetcher,
        ResourceKind, build_session,
    )

    session = build_session(cookie="<Cookie header from your browser>")
    scanner = CourseScanner(PageFetcher(session))
    items = scanner.scan_course("12345")
    wanted = scanner.items_by_kind({ResourceKind.SUMMARY, ResourceKind.SLIDE_DECK})
    completed, failed = RetrievalQueue(DiskSaver(session, Path("downloads"))).start(wanted)
"""

from .core import (
    CourseScanner,
    DiskSaver,
    QueueStatus,
    RetrievalQueue,
    RetrievalResult,
    RunState,
    batch_download,
)
from .errors import DownloaderError, FetchFailure, ParseAnomaly, RetrievalFailure
from .extraction import extract_lesson_links, parse_lesson_page
from .models import ResourceDescriptor, ResourceKind, RetrievalState, derive_filename
from .session import PageFetcher, build_session

__version__ = "2.0.0"

__all__ = [
    "CourseScanner",
    "DiskSaver",
    "QueueStatus",
    "RetrievalQueue",
    "RetrievalResult",
    "RunState",
    "batch_download",
    "DownloaderError",
    "FetchFailure",
    "ParseAnomaly",
    "RetrievalFailure",
    "extract_lesson_links",
    "parse_lesson_page",
    "ResourceDescriptor",
    "ResourceKind",
    "RetrievalState",
    "derive_filename",
    "PageFetcher",
    "build_session",
]
