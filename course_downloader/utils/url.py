"""
URL helpers: identifier extraction and absolute-URL resolution.
"""

import urllib.parse

from course_downloader.config import COURSE_ID_RE, LESSON_ID_RE, VIDEO_ID_RE


def extract_course_id(url: str) -> str | None:
    """Return the numeric course id in *url*, or ``None``."""
    m = COURSE_ID_RE.search(url)
    return m.group(1) if m else None


def extract_lesson_id(url: str) -> str | None:
    """Return the numeric lesson id in *url*, or ``None``."""
    m = LESSON_ID_RE.search(url)
    return m.group(1) if m else None


def extract_video_id(url: str) -> str | None:
    """Return the id in the ``/video/<id>/`` segment of *url*, or ``None``."""
    m = VIDEO_ID_RE.search(url)
    return m.group(1) if m else None


def is_valid_course_id(value: str) -> bool:
    return str(value).strip().isdigit()


def resolve_course_id(value: str) -> str | None:
    """Accept either a bare course id or any URL containing one."""
    value = value.strip()
    if is_valid_course_id(value):
        return value
    return extract_course_id(value)


def absolute_url(href: str, base: str) -> str:
    """Resolve *href* against *base*; absolute hrefs are returned unchanged."""
    href = href.strip()
    if urllib.parse.urlparse(href).scheme:
        return href
    return urllib.parse.urljoin(base, href)
