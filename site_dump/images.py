"""Image discovery, identifier assignment and downloading."""

from __future__ import annotations

import logging
import string
from pathlib import Path, PurePosixPath
from typing import List
from urllib.parse import urljoin, urlsplit

import requests
from bs4 import BeautifulSoup

from .fetcher import Fetcher
from .models import ImageCandidate, ImageRef

logger = logging.getLogger("site_dump")

DEFAULT_IMAGE_EXTENSION = ".jpg"
DEFAULT_ALT_TEXT = "No description"
IMAGE_IDS = string.ascii_uppercase


def image_id(counter: int) -> str:
    """Letter identifier for the n-th image of a crawl; wraps after Z."""
    return IMAGE_IDS[counter % len(IMAGE_IDS)]


def image_extension(url: str) -> str:
    """Extension of the URL path, or .jpg when the path has none."""
    return PurePosixPath(urlsplit(url).path).suffix or DEFAULT_IMAGE_EXTENSION


def image_filename(identifier: str, url: str) -> str:
    return f"image_{identifier}{image_extension(url)}"


def extract_image_candidates(soup: BeautifulSoup, page_url: str) -> List[ImageCandidate]:
    """Resolve every <img src> on the page, skipping inline data URLs and malformed sources."""
    candidates: List[ImageCandidate] = []
    for img in soup.find_all("img"):
        src = (img.get("src") or "").strip()
        if not src:
            continue
        try:
            abs_url = urljoin(page_url, src)
        except ValueError:
            continue
        if abs_url.startswith("data:"):
            continue
        alt_text = img.get("alt") or DEFAULT_ALT_TEXT
        candidates.append(ImageCandidate(src, abs_url, alt_text))
    return candidates


def build_image_ref(candidate: ImageCandidate, counter: int) -> ImageRef:
    identifier = image_id(counter)
    return ImageRef(
        id=identifier,
        alt_text=candidate.alt_text,
        source_url=candidate.absolute_url,
        local_filename=image_filename(identifier, candidate.absolute_url),
    )


def download_image(fetcher: Fetcher, ref: ImageRef, image_dir: Path) -> bool:
    """Fetch an image and store it under its local filename; failures are logged, not raised."""
    try:
        data = fetcher.fetch_image(ref.source_url)
    except requests.RequestException as exc:
        logger.warning("Failed to fetch image %s: %s", ref.source_url, exc)
        return False

    destination = image_dir / ref.local_filename
    try:
        destination.write_bytes(data)
    except OSError as exc:
        logger.warning("Failed to write image %s: %s", destination, exc)
        return False
    logger.debug("Saved image %s as %s", ref.source_url, destination)
    return True
