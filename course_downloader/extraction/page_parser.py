"""
course_downloader.extraction.page_parser
=========================================
Extracts resource descriptors and lesson links from a lesson page.

Pure functions: no I/O, and they never raise.  Markup that does not have the
expected shape simply yields empty results.

Anchor families
---------------
* document – ``href`` contains ``api/aluno/pdf``; classified as the
  highlighted or original electronic book.
* media    – ``href`` contains ``api/video`` and ``/download/``; classified as
  summary, slide deck, mind map or the raw video/audio file.  Raw media is
  recognised but never emitted.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup

from course_downloader.config import (
    AUDIO_MARKER,
    DOCUMENT_LINK_MARKER,
    HIGHLIGHTED_BOOK_MARKER,
    LESSON_LINK_EXCLUDE,
    LESSON_LINK_RE,
    MEDIA_DOWNLOAD_MARKER,
    MEDIA_LINK_MARKER,
    MIND_MAP_MARKER,
    ORIGINAL_BOOK_MARKER,
    SLIDE_DECK_MARKER,
    SUMMARY_MARKER,
)
from course_downloader.errors import ParseAnomaly
from course_downloader.models import ResourceDescriptor, ResourceKind
from course_downloader.utils.url import absolute_url, extract_video_id

log = logging.getLogger("course-downloader")

_BS4_PARSER = "lxml"


def _soup(markup: str | bytes) -> BeautifulSoup:
    if not isinstance(markup, (str, bytes)):
        raise ParseAnomaly(f"markup must be text, got {type(markup).__name__}")
    try:
        return BeautifulSoup(markup, _BS4_PARSER)
    except Exception as exc:
        raise ParseAnomaly(f"unparseable markup: {exc}") from exc


def _hrefs(soup: BeautifulSoup, marker: str | None = None) -> list[str]:
    """Every anchor ``href`` in document order, optionally filtered by *marker*."""
    found = []
    for a in soup.find_all("a", href=True):
        href = a.get("href")
        if not isinstance(href, str):
            continue
        href = href.strip()
        if href and (marker is None or marker in href):
            found.append(href)
    return found


def classify_document_link(href: str) -> ResourceKind | None:
    if HIGHLIGHTED_BOOK_MARKER in href:
        return ResourceKind.HIGHLIGHTED_BOOK
    if ORIGINAL_BOOK_MARKER in href:
        return ResourceKind.ORIGINAL_BOOK
    return None


def classify_media_link(href: str) -> ResourceKind | None:
    """Return the per-video kind of *href*; ``None`` means raw video/audio."""
    if SUMMARY_MARKER in href:
        return ResourceKind.SUMMARY
    if SLIDE_DECK_MARKER in href:
        return ResourceKind.SLIDE_DECK
    if MIND_MAP_MARKER in href:
        return ResourceKind.MIND_MAP
    if AUDIO_MARKER in href:
        log.debug("  raw audio link ignored: %s", href)
    return None


def _lesson_links(soup: BeautifulSoup) -> list[str]:
    links: list[str] = []
    seen: set[str] = set()
    for href in _hrefs(soup):
        if LESSON_LINK_EXCLUDE in href or not LESSON_LINK_RE.search(href):
            continue
        if href not in seen:
            seen.add(href)
            links.append(href)
    return links


def _resources(soup: BeautifulSoup, unit_index: int, page_url: str | None) -> list[ResourceDescriptor]:
    def _url(href: str) -> str:
        return absolute_url(href, page_url) if page_url else href

    found: list[ResourceDescriptor] = []

    for href in _hrefs(soup, DOCUMENT_LINK_MARKER):
        kind = classify_document_link(href)
        if kind is not None:
            found.append(ResourceDescriptor(kind, _url(href), kind.display_title, unit_index))

    # The ordinal moves on only after a video's summary is seen; siblings of
    # a video without a summary keep the previous video's number.
    video_ordinal = 1
    summarised: set[str | None] = set()
    for href in _hrefs(soup, MEDIA_LINK_MARKER):
        if MEDIA_DOWNLOAD_MARKER not in href:
            continue
        kind = classify_media_link(href)
        if kind is None:
            continue
        found.append(
            ResourceDescriptor(kind, _url(href), kind.display_title, unit_index, video_ordinal)
        )
        if kind is ResourceKind.SUMMARY:
            video_id = extract_video_id(href)
            if video_id not in summarised:
                summarised.add(video_id)
                video_ordinal += 1

    return found


def extract_lesson_links(markup: str | bytes) -> list[str]:
    """Return lesson-page hrefs (``…/lessons/<digits>``) in document order.

    Hrefs containing ``videos`` are excluded and duplicates are dropped by
    exact string equality.
    """
    try:
        return _lesson_links(_soup(markup))
    except ParseAnomaly as exc:
        log.debug("No lesson links extracted: %s", exc)
        return []


def parse_lesson_page(
    markup: str | bytes,
    unit_index: int,
    page_url: str | None = None,
) -> tuple[list[ResourceDescriptor], list[str]]:
    """Parse one lesson page.

    Parameters
    ----------
    markup     : Raw page HTML.
    unit_index : Lesson ordinal assigned by the scanner (>= 1).
    page_url   : When given, resource hrefs are resolved against it.

    Returns ``(descriptors, lesson_links)``.
    """
    try:
        soup = _soup(markup)
        return _resources(soup, unit_index, page_url), _lesson_links(soup)
    except (ParseAnomaly, ValueError) as exc:
        log.debug("Lesson page %d yielded nothing: %s", unit_index, exc)
        return [], []
