"""
Configuration constants for the course downloader.
"""

import os
import re

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
BASE_URL = os.environ.get(
    "COURSE_DOWNLOADER_BASE_URL", "https://www.estrategiaconcursos.com.br"
)
# Course lesson-listing page, relative to BASE_URL
LISTING_PATH = "/app/dashboard/courses/{course_id}/lessons"
DEFAULT_OUTPUT = os.environ.get("COURSE_DOWNLOADER_OUTPUT", "downloads")
# Raw Cookie header forwarded to every request (session is owned by the browser)
DEFAULT_COOKIE = os.environ.get("COURSE_DOWNLOADER_COOKIE", "")

# ---------------------------------------------------------------------------
# Scheduling
# ---------------------------------------------------------------------------
DELAY_BETWEEN_FETCHES = 0.3    # seconds between lesson page fetches
DELAY_BETWEEN_DOWNLOADS = 0.5  # seconds a worker idles between downloads
MAX_CONCURRENT_DOWNLOADS = 3   # retrieval worker count (K)

# ---------------------------------------------------------------------------
# Network
# ---------------------------------------------------------------------------
REQUEST_TIMEOUT = 30           # seconds per page request
DOWNLOAD_TIMEOUT = 120         # seconds per file download
MAX_RETRIES = 3                # transport-level retries on 5xx
FETCH_RETRY_ATTEMPTS = 2       # listing-page attempts used by the CLI
FETCH_RETRY_DELAY = 1.0        # base seconds between listing attempts
DOWNLOAD_CHUNK_SIZE = 65536

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0.0.0 Safari/537.36"
)

# ---------------------------------------------------------------------------
# Markup patterns
# ---------------------------------------------------------------------------
# Anchor families (substring of href)
DOCUMENT_LINK_MARKER = "api/aluno/pdf"
MEDIA_LINK_MARKER = "api/video"
MEDIA_DOWNLOAD_MARKER = "/download/"

# Document family → book variant
HIGHLIGHTED_BOOK_MARKER = "pdfGrifado"
ORIGINAL_BOOK_MARKER = "pdf/download"

# Media family → per-video material (anything else is the raw video itself)
SUMMARY_MARKER = "resumo"
SLIDE_DECK_MARKER = "slideshow"
MIND_MAP_MARKER = "mapa_mental"
AUDIO_MARKER = "audio"

LESSON_LINK_RE = re.compile(r"/lessons/\d+$")
LESSON_LINK_EXCLUDE = "videos"

COURSE_ID_RE = re.compile(r"/(?:courses|cursos)/(\d+)(?:/|$)")
LESSON_ID_RE = re.compile(r"/lessons/(\d+)")
VIDEO_ID_RE = re.compile(r"/video/(\d+)/")

# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------
# Keyed by ResourceKind value
FILE_PATTERNS = {
    "original_book":    "LivroEletronico_Original.pdf",
    "highlighted_book": "LivroEletronico_Grifado.pdf",
    "summary":          "Resumo.pdf",
    "slide_deck":       "Slides.pdf",
    "mind_map":         "MapaMental.pdf",
}

DISPLAY_TITLES = {
    "original_book":    "Electronic Book (Original)",
    "highlighted_book": "Electronic Book (Highlighted)",
    "summary":          "Summary",
    "slide_deck":       "Slides",
    "mind_map":         "Mind Map",
}
