"""
File storage – the default save collaborator for the retrieval queue.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

import requests

from course_downloader.config import DOWNLOAD_CHUNK_SIZE, DOWNLOAD_TIMEOUT
from course_downloader.errors import RetrievalFailure

log = logging.getLogger("course-downloader")

_INVALID_CHARS_RE = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def sanitize_filename(name: str) -> str:
    """Replace characters that are invalid in file names with ``_``."""
    cleaned = _INVALID_CHARS_RE.sub("_", name).strip().rstrip(".")
    return cleaned or "unnamed"


class DiskSaver:
    """
    ``save(url, filename)`` collaborator that streams *url* into
    *output_dir*/*filename* through a shared ``requests.Session``.

    Data lands in ``<filename>.part`` first and is renamed only when the
    transfer finished, so an interrupted download never looks complete.
    """

    def __init__(
        self,
        session: requests.Session,
        output_dir: Path,
        overwrite: bool = False,
        timeout: float = DOWNLOAD_TIMEOUT,
    ) -> None:
        self.session = session
        self.output_dir = Path(output_dir)
        self.overwrite = overwrite
        self.timeout = timeout

    def target_path(self, filename: str) -> Path:
        return self.output_dir / sanitize_filename(filename)

    def __call__(self, url: str, filename: str) -> None:
        target = self.target_path(filename)
        if not self.overwrite and target.exists() and target.stat().st_size > 0:
            log.info("[SKIP] Already on disk: %s", target.name)
            return

        part = target.with_name(target.name + ".part")
        try:
            with self.session.get(url, stream=True, timeout=self.timeout) as resp:
                if not resp.ok:
                    raise RetrievalFailure(url, filename, f"HTTP {resp.status_code}")
                size = self._write_part(part, resp.iter_content(DOWNLOAD_CHUNK_SIZE))
            if size == 0:
                raise RetrievalFailure(url, filename, "empty response body")
            part.replace(target)
        except RetrievalFailure:
            part.unlink(missing_ok=True)
            raise
        except (requests.RequestException, OSError) as exc:
            part.unlink(missing_ok=True)
            raise RetrievalFailure(url, filename, str(exc)) from exc

        log.debug("Saved %s (%d bytes)", target, size)

    def _write_part(self, part: Path, chunks: Iterable[bytes]) -> int:
        part.parent.mkdir(parents=True, exist_ok=True)
        size = 0
        with part.open("wb") as fh:
            for chunk in chunks:
                if chunk:
                    size += fh.write(chunk)
        return size
