"""
Command-line interface for the course downloader.

Scans a course, filters the discovered materials by kind and downloads
them with a bounded worker pool.
"""

import argparse
import json
import logging
import signal
import sys
import time
from pathlib import Path

import urllib3

from course_downloader.config import (
    BASE_URL, DEFAULT_COOKIE, DEFAULT_OUTPUT,
    DELAY_BETWEEN_DOWNLOADS, DELAY_BETWEEN_FETCHES,
    FETCH_RETRY_ATTEMPTS, MAX_CONCURRENT_DOWNLOADS,
)
from course_downloader.core import CourseScanner, DiskSaver, RetrievalQueue
from course_downloader.models import ResourceKind
from course_downloader.progress import DownloadProgressBar, ScanProgressBar
from course_downloader.session import PageFetcher, build_session
from course_downloader.utils.log import log, setup_logging
from course_downloader.utils.url import resolve_course_id


def parse_kinds(raw: str) -> set[ResourceKind]:
    """``"all"`` or a comma-separated list of kind values/names."""
    raw = raw.strip()
    if raw.lower() in ("all", ""):
        return set(ResourceKind)
    kinds = set()
    for part in raw.split(","):
        if part.strip():
            try:
                kinds.add(ResourceKind.parse(part))
            except ValueError as exc:
                raise argparse.ArgumentTypeError(str(exc)) from None
    return kinds


def _positive_int(raw: str) -> int:
    value = int(raw)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {value}")
    return value


def _non_negative_float(raw: str) -> float:
    value = float(raw)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    kind_names = ", ".join(k.value for k in ResourceKind)
    parser = argparse.ArgumentParser(
        description="Discover and download the materials of an online course.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m course_downloader 12345 --cookie \"$COOKIE\"\n"
            "  python -m course_downloader 12345 --kinds summary,slide_deck\n"
            "  python -m course_downloader 12345 --list-only --save-list items.json\n"
            "\n"
            f"Kinds: {kind_names}\n"
            "While downloading: Ctrl-C stops, SIGUSR1 pauses, SIGUSR2 resumes."
        ),
    )
    parser.add_argument(
        "course",
        help="Course id, or any course URL that contains it",
    )
    parser.add_argument(
        "--kinds", type=parse_kinds, default=set(ResourceKind),
        help="Comma-separated kinds to download, or 'all' (default: all)",
    )
    parser.add_argument(
        "--output", default=DEFAULT_OUTPUT,
        help=f"Output directory (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--concurrency", type=_positive_int, default=MAX_CONCURRENT_DOWNLOADS,
        help=f"Parallel download workers (default: {MAX_CONCURRENT_DOWNLOADS})",
    )
    parser.add_argument(
        "--fetch-delay", type=_non_negative_float, default=DELAY_BETWEEN_FETCHES,
        help=f"Seconds between lesson page fetches (default: {DELAY_BETWEEN_FETCHES})",
    )
    parser.add_argument(
        "--download-delay", type=_non_negative_float, default=DELAY_BETWEEN_DOWNLOADS,
        help=f"Seconds each worker waits between downloads (default: {DELAY_BETWEEN_DOWNLOADS})",
    )
    parser.add_argument(
        "--retries", type=_positive_int, default=FETCH_RETRY_ATTEMPTS,
        help=f"Attempts for the course listing page (default: {FETCH_RETRY_ATTEMPTS})",
    )
    parser.add_argument(
        "--base-url", default=BASE_URL,
        help=f"Site root (default: {BASE_URL})",
    )
    parser.add_argument(
        "--cookie", default=DEFAULT_COOKIE,
        help="Cookie header of a logged-in browser session "
             "(default: COURSE_DOWNLOADER_COOKIE env var)",
    )
    parser.add_argument(
        "--list-only", action="store_true",
        help="Scan and report the materials without downloading",
    )
    parser.add_argument(
        "--save-list", metavar="FILE",
        help="Write the selected materials to FILE as JSON",
    )
    parser.add_argument(
        "--overwrite", action="store_true", default=False,
        help="Re-download files that already exist in the output directory",
    )
    parser.add_argument(
        "--no-verify-ssl", dest="verify_ssl", action="store_false", default=True,
        help="Disable TLS certificate verification",
    )
    parser.add_argument(
        "--no-progress", dest="progress", action="store_false", default=True,
        help="Hide progress bars",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable verbose debug logging",
    )
    parser.add_argument(
        "--log-file",
        help="Write detailed logs to this file (always at DEBUG level)",
    )
    return parser.parse_args(argv)


def _install_signal_handlers(queue: RetrievalQueue) -> None:
    signal.signal(signal.SIGINT, lambda *_: queue.stop())
    if hasattr(signal, "SIGUSR1"):
        signal.signal(signal.SIGUSR1, lambda *_: queue.pause())
        signal.signal(signal.SIGUSR2, lambda *_: queue.resume())


def _write_list(path: str, items) -> None:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(
        json.dumps([item.to_dict() for item in items], indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    log.info("Material list written to %s", out.resolve())


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    setup_logging(debug=args.debug, log_file=args.log_file)

    if args.debug:
        logging.getLogger("urllib3").setLevel(logging.DEBUG)

    if not args.verify_ssl:
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        log.warning("TLS certificate verification is DISABLED (--no-verify-ssl)")

    course_id = resolve_course_id(args.course)
    if not course_id:
        log.error("Not a course id or course URL: %s", args.course)
        sys.exit(2)

    if not args.cookie:
        log.warning("No --cookie given – pages behind a login will not load")

    session = build_session(
        verify_ssl=args.verify_ssl, cookie=args.cookie, pool_size=args.concurrency,
    )
    scanner = CourseScanner(
        PageFetcher(session),
        base_url=args.base_url,
        delay=args.fetch_delay,
        listing_attempts=args.retries,
    )

    t0 = time.monotonic()
    scan_bar = ScanProgressBar(disable=not args.progress)
    try:
        found = scanner.scan_course(course_id, on_progress=scan_bar)
    finally:
        scan_bar.close()

    if not found:
        log.error("No materials found for course %s", course_id)
        sys.exit(1)

    stats = scanner.stats()
    log.info("Found %d item(s) in %d lesson(s)", stats["total"], len(stats["by_unit"]))
    for kind, count in sorted(stats["by_kind"].items()):
        log.info("  %-18s %d", kind, count)

    selected = scanner.items_by_kind(args.kinds)
    log.info(
        "Selected %d item(s) of kind(s): %s",
        len(selected), ", ".join(sorted(k.value for k in args.kinds)),
    )

    if args.save_list:
        _write_list(args.save_list, selected)

    if args.list_only:
        for item in selected:
            log.info("  %s  %s", item.filename, item.source_url)
        return

    output_dir = Path(args.output) / course_id
    output_dir.mkdir(parents=True, exist_ok=True)
    log.info("Output directory : %s", output_dir.resolve())

    download_bar = DownloadProgressBar(len(selected), disable=not args.progress)
    queue = RetrievalQueue(
        DiskSaver(session, output_dir, overwrite=args.overwrite),
        max_concurrent=args.concurrency,
        delay=args.download_delay,
        on_progress=download_bar,
    )
    _install_signal_handlers(queue)
    try:
        completed, failed = queue.start(selected)
    finally:
        download_bar.close()

    log.info(
        "Done: %d downloaded, %d failed, %d not attempted (%.1f s)",
        completed, failed, len(selected) - completed - failed,
        time.monotonic() - t0,
    )
    if failed or completed < len(selected):
        sys.exit(1)


if __name__ == "__main__":
    main()
