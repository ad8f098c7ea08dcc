import pytest
import requests

from site_dump.fetcher import Fetcher


def test_success_returns_body(session, fetcher):
    session.add_page("https://example.com/", "<p>hi</p>")
    assert fetcher.fetch_page("https://example.com/") == b"<p>hi</p>"


def test_http_error_status_raises(session, fetcher):
    session.add_page("https://example.com/gone", "gone", status=500)
    with pytest.raises(requests.HTTPError):
        fetcher.fetch_page("https://example.com/gone")


def test_non_2xx_below_400_raises(session, fetcher):
    # requests only raises for 4xx/5xx
    session.add_page("https://example.com/cached", "", status=304)
    with pytest.raises(requests.HTTPError):
        fetcher.fetch_page("https://example.com/cached")


def test_network_error_propagates(session, fetcher):
    session.add_error("https://example.com/", requests.ConnectionError("refused"))
    with pytest.raises(requests.RequestException):
        fetcher.fetch_image("https://example.com/")


def test_timeout_and_user_agent_are_sent(session):
    seen = {}
    original_get = session.get

    def recording_get(url, headers=None, timeout=None):
        seen.update(headers=headers, timeout=timeout)
        return original_get(url, headers=headers, timeout=timeout)

    session.get = recording_get
    session.add_page("https://example.com/", "ok")
    Fetcher(session=session, timeout=7, user_agent="test-agent").fetch_page("https://example.com/")
    assert seen == {"headers": {"User-Agent": "test-agent"}, "timeout": 7}


def test_context_manager_closes_session(session):
    with Fetcher(session=session) as fetcher:
        assert fetcher.headers["User-Agent"]
    assert session.closed
