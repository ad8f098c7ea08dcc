"""Configuration objects and constants for the crawler."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) site-dump/0.1"
)
DEFAULT_REQUEST_TIMEOUT = 30.0


@dataclass
class CrawlConfig:
    """Top-level settings that control crawling and packaging behaviour."""

    output_root: Path
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    create_archive: bool = True
