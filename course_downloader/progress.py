"""
Progress reporting.

Both engines accept plain callables:

* scan progress      – ``on_progress(lessons_visited, initial_lesson_count)``
* download progress  – ``on_progress({"completed", "failed", "remaining", "active"})``
* item completion    – ``on_item_complete(descriptor, error_or_None)``
* run completion     – ``on_complete({"total", "completed", "failed"})``

The tqdm-backed reporters below are what the CLI plugs into those slots.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from tqdm import tqdm

log = logging.getLogger("course-downloader")

ScanProgressCallback = Callable[[int, int], None]
DownloadProgressCallback = Callable[[dict], None]
ItemCompleteCallback = Callable[[Any, "BaseException | None"], None]
CompleteCallback = Callable[[dict], None]


def notify(callback: Callable | None, *args: Any) -> None:
    """Invoke *callback*; its exceptions are logged, never propagated."""
    if callback is None:
        return
    try:
        callback(*args)
    except Exception:
        log.exception("[ERR] Progress callback %r raised", callback)


class ScanProgressBar:
    """tqdm bar for the scanner; the total grows when lessons are discovered."""

    def __init__(self, disable: bool = False) -> None:
        self.bar = tqdm(desc="Scanning", unit="lesson", dynamic_ncols=True, disable=disable)

    def __call__(self, visited: int, total: int) -> None:
        self.bar.total = max(total, visited)
        self.bar.n = visited
        self.bar.refresh()

    def close(self) -> None:
        self.bar.close()


class DownloadProgressBar:
    """tqdm bar fed by the retrieval queue's progress snapshots."""

    def __init__(self, total: int, disable: bool = False) -> None:
        self.bar = tqdm(
            desc="Downloading",
            unit="file",
            total=total,
            dynamic_ncols=True,
            disable=disable,
            bar_format="{l_bar}{bar}| {n}/{total} [{elapsed}<{remaining}] {postfix}",
        )

    def __call__(self, snapshot: dict) -> None:
        self.bar.n = snapshot["completed"] + snapshot["failed"]
        self.bar.set_postfix(
            ok=snapshot["completed"],
            err=snapshot["failed"],
            active=snapshot["active"],
            queued=snapshot["remaining"],
        )

    def close(self) -> None:
        self.bar.close()
