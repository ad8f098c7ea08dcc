from __future__ import annotations

from typing import Dict, List, Optional, Tuple, Union

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from site_dump.config import CrawlConfig
from site_dump.fetcher import Fetcher

Route = Union[Tuple[int, bytes, str], Exception]


def make_response(url: str, status: int, body: bytes, content_type: str) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp.url = url
    resp._content = body
    resp.encoding = "utf-8"
    resp.headers = CaseInsensitiveDict({"Content-Type": content_type})
    resp.reason = "OK" if status < 400 else "Error"
    return resp


class FakeSession:
    """Stands in for requests.Session, serving canned responses by URL."""

    def __init__(self) -> None:
        self.routes: Dict[str, Route] = {}
        self.requested: List[str] = []
        self.closed = False

    def add_page(self, url: str, html: str, status: int = 200) -> None:
        self.routes[url] = (status, html.encode("utf-8"), "text/html; charset=utf-8")

    def add_image(self, url: str, data: bytes = b"\x89PNG fake", status: int = 200) -> None:
        self.routes[url] = (status, data, "image/png")

    def add_error(self, url: str, exc: Exception) -> None:
        self.routes[url] = exc

    def get(self, url: str, headers: Optional[dict] = None, timeout: Optional[float] = None):
        self.requested.append(url)
        route = self.routes.get(url)
        if route is None:
            return make_response(url, 404, b"not found", "text/plain")
        if isinstance(route, Exception):
            raise route
        status, body, content_type = route
        return make_response(url, status, body, content_type)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def fetcher(session: FakeSession) -> Fetcher:
    return Fetcher(session=session, timeout=5)


@pytest.fixture
def config(tmp_path) -> CrawlConfig:
    return CrawlConfig(output_root=tmp_path / "out", request_timeout=5)
