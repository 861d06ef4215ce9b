"""
Logging configuration for the course downloader.

Console output goes through ``colorlog`` and known ``[CATEGORY]`` tags in
a message are highlighted inline.  An optional file handler always
captures DEBUG detail.
"""

import logging
from pathlib import Path

import colorlog

log = logging.getLogger("course-downloader")

_FILE_LOG_FMT = "%(asctime)s [%(levelname)s] %(threadName)s %(message)s"
_FILE_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# ── Category colours ───────────────────────────────────────────────
_ANSI_RESET = "\033[0m"
_CATEGORY_STYLES: dict[str, str] = {
    "[SCAN]":   "\033[1;36m",
    "[LESSON]": "\033[36m",
    "[SKIP]":   "\033[90m",
    "[SAVE]":   "\033[1;32m",
    "[ERR]":    "\033[1;31m",
    "[QUEUE]":  "\033[37m",
    "[RETRY]":  "\033[33m",
}


def _apply_category_styles(msg: str) -> str:
    """Inject ANSI colours for known ``[CATEGORY]`` tags in *msg*."""
    for tag, style in _CATEGORY_STYLES.items():
        if tag in msg:
            msg = msg.replace(tag, f"{style}{tag}{_ANSI_RESET}")
    return msg


class _CategoryFormatter(colorlog.ColoredFormatter):
    """``colorlog.ColoredFormatter`` that also highlights inline
    ``[CATEGORY]`` tags."""

    def format(self, record: logging.LogRecord) -> str:
        return _apply_category_styles(super().format(record))


def setup_logging(debug: bool = False, log_file: str | None = None) -> None:
    """Configure the package logger.

    Parameters
    ----------
    debug : bool
        Enable DEBUG-level console output (default is INFO).
    log_file : str | None
        If given, also write log messages to this file path.
    """
    level = logging.DEBUG if debug else logging.INFO
    log.setLevel(logging.DEBUG if log_file else level)
    log.handlers.clear()

    handler = colorlog.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(_CategoryFormatter(
        "%(log_color)s%(asctime)s [%(levelname)s]%(reset)s %(message)s",
        datefmt="%H:%M:%S",
        log_colors={
            "DEBUG":    "cyan",
            "INFO":     "green",
            "WARNING":  "yellow",
            "ERROR":    "red",
            "CRITICAL": "bold_red",
        },
    ))
    log.addHandler(handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_path), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(_FILE_LOG_FMT, datefmt=_FILE_LOG_DATEFMT))
        log.addHandler(fh)
        log.info("Logging to file: %s", log_path.resolve())
