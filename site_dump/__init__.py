"""Breadth-first website crawler that dumps readable text and images."""

from .config import CrawlConfig
from .crawler import SiteCrawler, crawl_and_archive, crawl_website
from .models import CrawlResult

__all__ = [
    "CrawlConfig",
    "CrawlResult",
    "SiteCrawler",
    "crawl_and_archive",
    "crawl_website",
]
