"""
Breadth-first course scanner.

Starts from a course's lesson-listing page and walks every lesson page
reachable through lesson links, collecting the resources each page offers.

* Explicit visited set + FIFO frontier: each lesson is fetched at most once,
  even when several pages link to it.
* Unit indices are assigned in dequeue order, so numbering follows the
  order lessons are visited rather than the order they are first linked.
* A failed listing fetch ends the scan with no results; a failed lesson
  fetch only drops that lesson.
"""

from __future__ import annotations

import time
import urllib.parse
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Iterable

from course_downloader.config import BASE_URL, DELAY_BETWEEN_FETCHES, FETCH_RETRY_DELAY, LISTING_PATH
from course_downloader.errors import FetchFailure
from course_downloader.extraction import extract_lesson_links, parse_lesson_page
from course_downloader.models import ResourceDescriptor, ResourceKind
from course_downloader.progress import ScanProgressCallback, notify
from course_downloader.utils.log import log
from course_downloader.utils.retry import retry

PageFetch = Callable[[str], "str | None"]


@dataclass
class CrawlState:
    visited: set[str] = field(default_factory=set)
    frontier: deque[str] = field(default_factory=deque)
    results: list[ResourceDescriptor] = field(default_factory=list)


class CourseScanner:
    """
    Discovers every lesson of a course and the resources on each lesson page.

    *fetch* is called with an absolute URL and must return the page markup;
    it signals failure by raising ``FetchFailure`` (or returning ``None``).
    """

    def __init__(
        self,
        fetch: PageFetch,
        base_url: str = BASE_URL,
        delay: float = DELAY_BETWEEN_FETCHES,
        listing_attempts: int = 1,
        retry_delay: float = FETCH_RETRY_DELAY,
    ) -> None:
        self.fetch = fetch
        self.base = base_url.rstrip("/")
        self.delay = max(0.0, delay)
        self.listing_attempts = max(1, listing_attempts)
        self.retry_delay = max(0.0, retry_delay)

        self.state = CrawlState()
        self.items: list[ResourceDescriptor] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def listing_url(self, course_id: str) -> str:
        return self.base + LISTING_PATH.format(course_id=course_id)

    def lesson_url(self, href: str) -> str:
        """Absolute URL of a lesson link; root-relative links keep the base path."""
        if urllib.parse.urlsplit(href).scheme:
            return href
        if href.startswith("/") and not href.startswith("//"):
            return self.base + href
        return urllib.parse.urljoin(self.base + "/", href)

    def scan_course(
        self,
        course_id: str,
        on_progress: ScanProgressCallback | None = None,
    ) -> list[ResourceDescriptor]:
        """Scan *course_id* and return all descriptors in visit order."""
        log.info("[SCAN] Starting scan for course %s", course_id)
        self.state = state = CrawlState()
        self.items = []

        listing_url = self.listing_url(course_id)
        try:
            listing = self._fetch_listing(listing_url)
        except FetchFailure as exc:
            log.error("[ERR] Failed to load course listing page – %s", exc)
            return []

        initial_links = extract_lesson_links(listing)
        state.frontier.extend(initial_links)
        total = len(initial_links)
        log.info("[SCAN] Found %d lesson(s) in listing", total)

        unit_index = 0
        while state.frontier:
            lesson = state.frontier.popleft()
            if lesson in state.visited:
                continue
            state.visited.add(lesson)
            unit_index += 1

            url = self.lesson_url(lesson)
            try:
                markup = self._fetch(url)
            except FetchFailure as exc:
                log.warning("[SKIP] Lesson %d not fetched – %s", unit_index, exc)
                continue

            descriptors, links = parse_lesson_page(markup, unit_index, url)
            state.results.extend(descriptors)
            log.info("[LESSON] Lesson %d: %d item(s)", unit_index, len(descriptors))

            added = 0
            for link in links:
                if link not in state.visited and link not in state.frontier:
                    state.frontier.append(link)
                    added += 1
            if added:
                log.debug("  +%d new lesson(s) queued", added)

            notify(on_progress, len(state.visited), total)

            if self.delay:
                time.sleep(self.delay)

        self.items = list(state.results)
        log.info(
            "[SCAN] Scan complete: %d item(s) from %d lesson(s)",
            len(self.items), len(state.visited),
        )
        return list(self.items)

    def items_by_kind(self, kinds: Iterable[ResourceKind]) -> list[ResourceDescriptor]:
        wanted = set(kinds)
        return [item for item in self.items if item.kind in wanted]

    def items_by_unit(self) -> dict[int, list[ResourceDescriptor]]:
        grouped: dict[int, list[ResourceDescriptor]] = {}
        for item in self.items:
            grouped.setdefault(item.unit_index, []).append(item)
        return grouped

    def stats(self) -> dict:
        by_kind: dict[str, int] = {}
        by_unit: dict[int, int] = {}
        for item in self.items:
            by_kind[item.kind.value] = by_kind.get(item.kind.value, 0) + 1
            by_unit[item.unit_index] = by_unit.get(item.unit_index, 0) + 1
        return {"total": len(self.items), "by_kind": by_kind, "by_unit": by_unit}

    def reset(self) -> None:
        self.state = CrawlState()
        self.items = []

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _fetch(self, url: str) -> str:
        log.debug("GET %s", url)
        try:
            markup = self.fetch(url)
        except FetchFailure:
            raise
        except Exception as exc:
            raise FetchFailure(url, f"{type(exc).__name__}: {exc}") from exc
        if markup is None:
            raise FetchFailure(url, "no content")
        return markup

    def _fetch_listing(self, url: str) -> str:
        if self.listing_attempts == 1:
            return self._fetch(url)
        return retry(
            lambda: self._fetch(url),
            attempts=self.listing_attempts,
            delay=self.retry_delay,
            exceptions=(FetchFailure,),
        )
