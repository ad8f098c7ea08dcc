"""Breadth-first orchestration of fetching, cleaning and packaging a site."""

from __future__ import annotations

import logging
import math
import time
from dataclasses import replace
from pathlib import Path
from typing import Callable, Optional

import requests
from bs4 import BeautifulSoup

from .aggregator import ContentAggregator
from .archive import ArchiveError, create_zip_archive
from .config import CrawlConfig
from .content import clean_content, extract_title
from .fetcher import Fetcher
from .images import build_image_ref, download_image, extract_image_candidates
from .links import extract_links, is_in_scope, link_hostname
from .models import CrawlJob, CrawlResult, PageResult
from .utils import parse_start_url, slugify

logger = logging.getLogger("site_dump")

ProgressCallback = Callable[[int, str], None]

MAX_RUNNING_PROGRESS = 95
COMPLETE_MESSAGE = "Crawling complete!"
READY_MESSAGE = "Crawling complete! Ready for download."


def _no_progress(progress: int, status: str) -> None:
    return None


def estimate_progress(pages_processed: int, queue_length: int) -> int:
    """Coarse completion estimate against the currently known frontier, capped below 100."""
    total = pages_processed + queue_length
    if total == 0:
        return 0
    percent = math.floor(pages_processed / total * 100 + 0.5)
    return min(MAX_RUNNING_PROGRESS, percent)


def build_output_dir(config: CrawlConfig, domain: str) -> Path:
    """Create a fresh crawl directory (with its images/ folder) under the output root."""
    name = f"{slugify(domain)}-crawl-{int(time.time() * 1000)}"
    output_dir = config.output_root / name
    (output_dir / "images").mkdir(parents=True, exist_ok=True)
    return output_dir


class SiteCrawler:
    """Traversal controller for one crawl.

    Owns the visited set, the FIFO frontier and the image counter. Pages are
    fetched and fully processed one at a time; there is no page or depth limit,
    so the crawl ends only when every reachable in-scope URL has been seen.
    """

    def __init__(
        self,
        start_url: str,
        config: CrawlConfig,
        fetcher: Optional[Fetcher] = None,
        progress: Optional[ProgressCallback] = None,
    ) -> None:
        normalized, domain = parse_start_url(start_url)
        self.config = config
        self.job = CrawlJob(start_url=normalized, domain=domain)
        self.fetcher = fetcher or Fetcher(
            timeout=config.request_timeout, user_agent=config.user_agent
        )
        self.progress = progress or _no_progress
        self.aggregator = ContentAggregator()

    def run(self) -> CrawlResult:
        """Crawl the site and write the content dump; filesystem errors propagate."""
        job = self.job
        logger.info("Starting to crawl: %s", job.start_url)
        output_dir = build_output_dir(self.config, job.domain)
        image_dir = output_dir / "images"

        job.queue.append(job.start_url)
        while job.queue:
            url = job.queue.popleft()
            if url in job.visited:
                continue
            job.visited.add(url)

            self.progress(
                estimate_progress(job.pages_processed, len(job.queue)),
                f"Crawling: {url}",
            )
            page = self.process_page(url, image_dir)
            if page is None:
                continue
            self.aggregator.add_page(page)
            job.pages_processed += 1

        content_path = output_dir / f"{job.domain}-content.txt"
        self.aggregator.write(content_path)

        logger.info("Crawling complete!")
        logger.info("- Visited %d pages", job.pages_processed)
        logger.info("- Downloaded %d images", job.images_saved)
        logger.info("- Content saved to: %s", content_path)
        logger.info("- Images saved to: %s", image_dir)
        self.progress(100, COMPLETE_MESSAGE)

        return CrawlResult(
            success=True,
            output_dir=output_dir,
            pages_visited=job.pages_processed,
            images_downloaded=job.images_saved,
        )

    def process_page(self, url: str, image_dir: Path) -> Optional[PageResult]:
        """Fetch, clean and mine one page; returns None when the page is skipped."""
        logger.info("Crawling: %s", url)
        try:
            html = self.fetcher.fetch_page(url)
        except requests.RequestException as exc:
            logger.warning("Failed to fetch %s: %s", url, exc)
            return None

        try:
            soup = BeautifulSoup(html, "html.parser")
            page = PageResult(
                url=url,
                title=extract_title(soup),
                cleaned_text=clean_content(soup),
            )
            self.collect_images(soup, page, image_dir)
            self.enqueue_links(soup, url)
        except Exception:  # pylint: disable=broad-except
            logger.exception("Unexpected error processing %s", url)
            return None
        return page

    def collect_images(self, soup: BeautifulSoup, page: PageResult, image_dir: Path) -> None:
        """Record a reference for each image, then try to download it."""
        job = self.job
        for candidate in extract_image_candidates(soup, page.url):
            ref = build_image_ref(candidate, job.image_counter)
            job.image_counter += 1
            page.image_refs.append(ref)
            if download_image(self.fetcher, ref, image_dir):
                job.images_saved += 1

    def enqueue_links(self, soup: BeautifulSoup, page_url: str) -> None:
        job = self.job
        for link in extract_links(soup, page_url):
            if is_in_scope(link_hostname(link), link, job.domain, job.visited, job.queue):
                job.queue.append(link)


def crawl_website(
    start_url: str,
    config: CrawlConfig,
    progress: Optional[ProgressCallback] = None,
    fetcher: Optional[Fetcher] = None,
) -> CrawlResult:
    """Crawl a site and report the outcome as a CrawlResult instead of raising."""
    try:
        crawler = SiteCrawler(start_url, config, fetcher=fetcher, progress=progress)
    except ValueError as exc:
        logger.error("Rejected %s: %s", start_url, exc)
        return CrawlResult(success=False, error=str(exc))

    try:
        if fetcher is not None:
            return crawler.run()
        with crawler.fetcher:
            return crawler.run()
    except OSError as exc:
        logger.error("Crawling failed: %s", exc)
        return CrawlResult(success=False, error=str(exc))


def crawl_and_archive(
    start_url: str,
    config: CrawlConfig,
    progress: Optional[ProgressCallback] = None,
    fetcher: Optional[Fetcher] = None,
) -> CrawlResult:
    """Crawl a site, then zip its output directory next to it."""
    result = crawl_website(start_url, config, progress=progress, fetcher=fetcher)
    if not result.success or not config.create_archive:
        return result

    archive_path = result.output_dir.parent / f"{result.output_dir.name}.zip"
    try:
        create_zip_archive(result.output_dir, archive_path)
    except ArchiveError as exc:
        logger.error("Archiving failed: %s", exc)
        return replace(result, success=False, error=str(exc))

    if progress:
        progress(100, READY_MESSAGE)
    return replace(result, archive_path=archive_path)
