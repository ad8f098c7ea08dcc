"""HTTP access for pages and images."""

from __future__ import annotations

import logging
from typing import Dict, Optional

import requests

from .config import DEFAULT_REQUEST_TIMEOUT, DEFAULT_USER_AGENT

logger = logging.getLogger("site_dump")


class Fetcher:
    """Thin wrapper around a requests session that treats anything but 2xx as a failure."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.session = session or requests.Session()
        self.timeout = timeout
        self.headers: Dict[str, str] = {"User-Agent": user_agent}

    def get(self, url: str) -> requests.Response:
        """GET a URL; raises requests.RequestException on network errors or non-2xx status."""
        resp = self.session.get(url, headers=self.headers, timeout=self.timeout)
        resp.raise_for_status()
        if not 200 <= resp.status_code < 300:
            raise requests.HTTPError(
                f"Unexpected status {resp.status_code} for url: {url}", response=resp
            )
        return resp

    def fetch_page(self, url: str) -> bytes:
        """Return the raw body of an HTML page."""
        return self.get(url).content

    def fetch_image(self, url: str) -> bytes:
        """Return the raw bytes of an image."""
        return self.get(url).content

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "Fetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
