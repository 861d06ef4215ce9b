"""
Error types shared by the scanner, the parser and the retrieval queue.

None of these ever escape the public surface of ``CourseScanner`` or
``RetrievalQueue``; they travel between the engines and their collaborators.
"""


class DownloaderError(Exception):
    """Base class for all course_downloader errors."""


class FetchFailure(DownloaderError):
    """The page-fetch collaborator could not return markup for *url*."""

    def __init__(self, url: str, reason: str, status_code: int | None = None) -> None:
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"{url}: {reason}")


class ParseAnomaly(DownloaderError):
    """Markup did not have the expected shape.

    Raised only inside the page parser and absorbed at its boundary.
    """


class RetrievalFailure(DownloaderError):
    """The save collaborator could not persist *url* as *filename*."""

    def __init__(self, url: str, filename: str, reason: str) -> None:
        self.url = url
        self.filename = filename
        self.reason = reason
        super().__init__(f"{filename} ({url}): {reason}")
