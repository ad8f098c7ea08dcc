"""Link discovery and the same-domain scope filter."""

from __future__ import annotations

from typing import Collection, List
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup

from .utils import normalize_url

# Matched by exact host or host suffix.
SOCIAL_MEDIA_DOMAINS = (
    "facebook.com",
    "twitter.com",
    "instagram.com",
    "linkedin.com",
    "youtube.com",
    "pinterest.com",
    "tiktok.com",
    "reddit.com",
    "tumblr.com",
    "snapchat.com",
    "whatsapp.com",
    "telegram.org",
    "discord.com",
    "medium.com",
    "t.co",
    "fb.me",
    "youtu.be",
    "bit.ly",
    "goo.gl",
    "tinyurl.com",
    "ow.ly",
    "is.gd",
)


def is_denylisted(hostname: str, denylist: Collection[str] = SOCIAL_MEDIA_DOMAINS) -> bool:
    """Return True for social-media and link-shortener hosts."""
    return any(hostname == host or hostname.endswith(host) for host in denylist)


def is_same_site(hostname: str, base_domain: str) -> bool:
    """Same host or a true subdomain; a bare substring match does not count."""
    return hostname == base_domain or hostname.endswith("." + base_domain)


def is_in_scope(
    candidate_host: str,
    candidate_url: str,
    base_domain: str,
    visited: Collection[str] = (),
    queued: Collection[str] = (),
) -> bool:
    """Decide whether a discovered link should be added to the frontier."""
    if is_denylisted(candidate_host):
        return False
    if "#" in candidate_url:
        return False
    if not is_same_site(candidate_host, base_domain):
        return False
    return candidate_url not in visited and candidate_url not in queued


def resolve_link(base_url: str, href: str) -> str:
    """Resolve an href against the page URL; raises ValueError for malformed URLs."""
    resolved = normalize_url(urljoin(base_url, href.strip()))
    if "#" in href and "#" not in resolved:
        resolved += "#"
    return resolved


def extract_links(soup: BeautifulSoup, page_url: str) -> List[str]:
    """Return the absolute targets of every anchor on the page, in document order."""
    links: List[str] = []
    for anchor in soup.find_all("a", href=True):
        href = anchor["href"]
        if not href.strip():
            continue
        try:
            links.append(resolve_link(page_url, href))
        except ValueError:
            continue
    return links


def link_hostname(url: str) -> str:
    """Host of a resolved link, or an empty string for host-less schemes."""
    try:
        return urlsplit(url).hostname or ""
    except ValueError:
        return ""
