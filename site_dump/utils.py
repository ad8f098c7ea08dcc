"""Utility helpers for string normalization and URL handling."""

from __future__ import annotations

import re
from typing import Tuple
from urllib.parse import quote, urlsplit, urlunsplit

SLUG_PATTERN = re.compile(r"[^a-z0-9]+")
ALLOWED_SCHEMES = ("http", "https")
# Characters a browser leaves unescaped when serializing a path or query.
PATH_SAFE_CHARS = "/%:@!$&'()*+,;=[]|^"
QUERY_SAFE_CHARS = "/%:@!$&()*+,;=[]|^?`{}"
FORBIDDEN_HOST_PATTERN = re.compile(r"[\s\x00-\x1f\x7f<>\\^|%]")


def slugify(value: str, fallback: str = "site") -> str:
    """Generate a filesystem-friendly slug using ASCII characters only."""
    normalized = value.encode("ascii", "ignore").decode("ascii")
    normalized = normalized.lower()
    normalized = SLUG_PATTERN.sub("-", normalized).strip("-")
    return normalized or fallback


def normalize_url(url: str) -> str:
    """Serialize a URL the way a browser does.

    Scheme and host are lower-cased, an empty path becomes '/', and characters a
    browser would percent-encode in the path or query (spaces, quotes, angle
    brackets, non-ASCII) are encoded. Existing escapes are left alone.
    """
    parts = urlsplit(url)
    path = parts.path
    if not path and parts.netloc:
        path = "/"
    normalized = urlunsplit(
        (
            parts.scheme.lower(),
            parts.netloc.lower(),
            quote(path, safe=PATH_SAFE_CHARS),
            quote(parts.query, safe=QUERY_SAFE_CHARS),
            parts.fragment,
        )
    )
    # urlunsplit drops an empty fragment; keep the marker.
    if url.endswith("#") and not normalized.endswith("#"):
        normalized += "#"
    return normalized


def parse_start_url(url: str) -> Tuple[str, str]:
    """Validate a crawl seed and return its normalized form and host."""
    if not url or not url.strip():
        raise ValueError("URL is required")
    try:
        parts = urlsplit(url.strip())
        # .port raises ValueError for a non-numeric or out-of-range port
        hostname, _port = parts.hostname, parts.port
    except ValueError as exc:
        raise ValueError(f"Invalid URL: {url}") from exc
    if parts.scheme.lower() not in ALLOWED_SCHEMES:
        raise ValueError(f"Unsupported URL scheme: {parts.scheme or '(none)'}")
    if not hostname or FORBIDDEN_HOST_PATTERN.search(hostname):
        raise ValueError(f"Invalid URL: {url}")
    return normalize_url(url.strip()), hostname
