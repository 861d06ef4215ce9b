"""
HTTP session management and the default page-fetch collaborator.

Authentication is not handled here: the session only forwards whatever
Cookie header the caller obtained from a logged-in browser.
"""

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from course_downloader.config import MAX_CONCURRENT_DOWNLOADS, MAX_RETRIES, REQUEST_TIMEOUT, USER_AGENT
from course_downloader.errors import FetchFailure


def build_session(
    verify_ssl: bool = True,
    cookie: str | None = None,
    pool_size: int = MAX_CONCURRENT_DOWNLOADS,
) -> requests.Session:
    """Return a requests.Session with retry logic and keep-alive pre-configured."""
    session = requests.Session()
    retry = Retry(
        total=MAX_RETRIES,
        backoff_factor=0.5,
        status_forcelist=[500, 502, 503, 504],
    )
    # One pooled connection per retrieval worker plus one for page fetches
    adapter = HTTPAdapter(
        max_retries=retry,
        pool_connections=pool_size + 1,
        pool_maxsize=pool_size + 1,
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = verify_ssl
    session.headers.update({
        "User-Agent": USER_AGENT,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "pt-BR,pt;q=0.9,en-US;q=0.8,en;q=0.7",
        "Connection": "keep-alive",
    })
    if cookie:
        session.headers["Cookie"] = cookie.strip()
    return session


class PageFetcher:
    """``fetch(url) -> markup`` collaborator backed by a requests.Session."""

    def __init__(self, session: requests.Session, timeout: float = REQUEST_TIMEOUT) -> None:
        self.session = session
        self.timeout = timeout

    def __call__(self, url: str) -> str:
        try:
            resp = self.session.get(
                url,
                timeout=self.timeout,
                allow_redirects=True,
                headers={"Accept": "text/html"},
            )
        except requests.RequestException as exc:
            raise FetchFailure(url, str(exc)) from exc
        if not resp.ok:
            raise FetchFailure(url, f"HTTP {resp.status_code}: {resp.reason}", resp.status_code)
        return resp.text
