"""
Bounded-concurrency retrieval queue.

``RetrievalQueue.start(items)`` runs ``max_concurrent`` worker threads over a
shared pending list and returns once every worker has exited.

Invariants
----------
* Pending items, counters and the run state are touched only while holding
  ``self._cond``; a claim is one check-and-pop under that lock, so an item
  is handed to at most one worker.
* At most ``max_concurrent`` items are active at any moment.
* A failed save marks only its own item failed; ``start`` always returns
  the final counts.
* ``reset`` only takes effect between runs.
"""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, NamedTuple

from course_downloader.config import DELAY_BETWEEN_DOWNLOADS, MAX_CONCURRENT_DOWNLOADS
from course_downloader.models import ResourceDescriptor, RetrievalState
from course_downloader.progress import (
    CompleteCallback,
    DownloadProgressCallback,
    ItemCompleteCallback,
    notify,
)
from course_downloader.utils.log import log

SaveFn = Callable[[str, str], "bool | None"]


class RunState(str, Enum):
    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"


class RetrievalResult(NamedTuple):
    completed: int
    failed: int


@dataclass(frozen=True)
class QueueStatus:
    pending_count: int
    active_count: int
    completed_count: int
    failed_count: int
    run_state: RunState

    @property
    def is_paused(self) -> bool:
        return self.run_state is RunState.PAUSED

    @property
    def is_stopped(self) -> bool:
        return self.run_state is RunState.STOPPED


class RetrievalQueue:
    """
    Downloads descriptors through *save* with at most *max_concurrent*
    retrievals in flight.

    *save* is called as ``save(url, filename)``; raising (normally
    ``RetrievalFailure``) or returning ``False`` marks the item failed.
    """

    def __init__(
        self,
        save: SaveFn,
        max_concurrent: int = MAX_CONCURRENT_DOWNLOADS,
        delay: float = DELAY_BETWEEN_DOWNLOADS,
        on_progress: DownloadProgressCallback | None = None,
        on_item_complete: ItemCompleteCallback | None = None,
        on_complete: CompleteCallback | None = None,
        on_error: ItemCompleteCallback | None = None,
    ) -> None:
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be >= 1")
        self.save = save
        self.max_concurrent = max_concurrent
        self.delay = delay

        self.on_progress = on_progress
        self.on_item_complete = on_item_complete
        self.on_complete = on_complete
        self.on_error = on_error

        self._cond = threading.Condition()
        self._pending: deque[ResourceDescriptor] = deque()
        self._active = 0
        self._completed = 0
        self._failed = 0
        self._state = RunState.RUNNING
        self._running = False
        self._workers: list[threading.Thread] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def start(self, items: Iterable[ResourceDescriptor]) -> RetrievalResult:
        """Retrieve *items* and block until every worker has exited."""
        items = list(items)
        if not items:
            log.info("[QUEUE] Nothing to download")
            return RetrievalResult(0, 0)

        with self._cond:
            self._pending = deque(items)
            self._active = 0
            self._completed = 0
            self._failed = 0
            self._state = RunState.RUNNING
            self._running = True

        total = len(items)
        log.info(
            "[QUEUE] Starting downloads: %d item(s), max %d concurrent",
            total, self.max_concurrent,
        )

        self._workers = [
            threading.Thread(
                target=self._worker_loop,
                name=f"RetrievalWorker-{i + 1}",
                daemon=True,
            )
            for i in range(self.max_concurrent)
        ]
        for worker in self._workers:
            worker.start()
        for worker in self._workers:
            worker.join()
        self._workers = []

        with self._cond:
            self._running = False
            result = RetrievalResult(self._completed, self._failed)

        notify(
            self.on_complete,
            {"total": total, "completed": result.completed, "failed": result.failed},
        )
        log.info(
            "[QUEUE] Downloads finished: %d succeeded, %d failed",
            result.completed, result.failed,
        )
        return result

    def pause(self) -> None:
        with self._cond:
            if self._state is RunState.RUNNING:
                self._state = RunState.PAUSED
                log.info("[QUEUE] Downloads paused")

    def resume(self) -> None:
        with self._cond:
            if self._state is RunState.PAUSED:
                self._state = RunState.RUNNING
                self._cond.notify_all()
                log.info("[QUEUE] Downloads resumed")

    def stop(self) -> None:
        """Discard every unclaimed item and make all workers exit."""
        with self._cond:
            dropped = len(self._pending)
            self._state = RunState.STOPPED
            self._pending.clear()
            self._cond.notify_all()
        log.info("[QUEUE] Downloads stopped (%d unclaimed item(s) dropped)", dropped)

    def reset(self) -> None:
        """Clear pending items and counters; ignored while a run is in progress."""
        with self._cond:
            if self._running:
                log.warning("[QUEUE] reset() ignored while downloads are running")
                return
            self._pending.clear()
            self._active = 0
            self._completed = 0
            self._failed = 0
            self._state = RunState.RUNNING
            self._cond.notify_all()

    def get_status(self) -> QueueStatus:
        with self._cond:
            return QueueStatus(
                pending_count=len(self._pending),
                active_count=self._active,
                completed_count=self._completed,
                failed_count=self._failed,
                run_state=self._state,
            )

    # ------------------------------------------------------------------
    # Worker internals
    # ------------------------------------------------------------------

    def _worker_loop(self) -> None:
        while True:
            item = self._claim()
            if item is None:
                return
            self._retrieve(item)
            if not self._idle():
                return

    def _claim(self) -> ResourceDescriptor | None:
        """Pop the next pending item, waiting while paused."""
        with self._cond:
            while self._state is RunState.PAUSED and self._pending:
                self._cond.wait()
            if self._state is RunState.STOPPED or not self._pending:
                return None
            item = self._pending.popleft()
            self._active += 1
            return item

    def _retrieve(self, item: ResourceDescriptor) -> None:
        filename = item.filename
        error: BaseException | None = None
        try:
            if self.save(item.source_url, filename) is False:
                error = RuntimeError("save reported failure")
        except Exception as exc:
            error = exc

        with self._cond:
            self._active -= 1
            if error is None:
                item.state = RetrievalState.DOWNLOADED
                self._completed += 1
            else:
                item.state = RetrievalState.FAILED
                self._failed += 1
            snapshot = {
                "completed": self._completed,
                "failed": self._failed,
                "remaining": len(self._pending),
                "active": self._active,
            }

        if error is None:
            log.info("[SAVE] Downloaded: %s", filename)
        else:
            log.error("[ERR] Failed to download %s – %s", filename, error)
            notify(self.on_error, item, error)
        notify(self.on_item_complete, item, error)
        notify(self.on_progress, snapshot)

    def _idle(self) -> bool:
        """Sleep between downloads; ``False`` once the queue is stopped."""
        with self._cond:
            if self._pending and self.delay > 0:
                self._cond.wait_for(lambda: self._state is RunState.STOPPED, timeout=self.delay)
            return self._state is not RunState.STOPPED


def batch_download(items: Iterable[ResourceDescriptor], save: SaveFn, **options) -> RetrievalResult:
    """One-shot helper: build a queue with *options* and run *items* through it."""
    return RetrievalQueue(save, **options).start(items)
