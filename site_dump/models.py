"""Data models used throughout the crawler pipeline."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Deque, List, Optional, Set


@dataclass
class CrawlJob:
    """Mutable traversal state owned by a single crawl."""

    start_url: str
    domain: str
    visited: Set[str] = field(default_factory=set)
    queue: Deque[str] = field(default_factory=deque)
    image_counter: int = 0
    pages_processed: int = 0
    images_saved: int = 0


@dataclass
class ImageCandidate:
    """Raw image reference discovered while parsing a page."""

    original_src: str
    absolute_url: str
    alt_text: str


@dataclass
class ImageRef:
    """Image reference emitted into the text dump."""

    id: str
    alt_text: str
    source_url: str
    local_filename: str


@dataclass
class PageResult:
    """Cleaned output for one visited page."""

    url: str
    title: str
    cleaned_text: str
    image_refs: List[ImageRef] = field(default_factory=list)


@dataclass
class CrawlResult:
    """Terminal outcome of a crawl."""

    success: bool
    output_dir: Optional[Path] = None
    pages_visited: int = 0
    images_downloaded: int = 0
    error: Optional[str] = None
    archive_path: Optional[Path] = None

    def as_dict(self) -> dict:
        """Return the result in the shape reported to callers."""
        if not self.success:
            return {"success": False, "error": self.error}
        payload = {
            "success": True,
            "outputDir": str(self.output_dir),
            "pagesVisited": self.pages_visited,
            "imagesDownloaded": self.images_downloaded,
        }
        if self.archive_path is not None:
            payload["archivePath"] = str(self.archive_path)
        return payload
