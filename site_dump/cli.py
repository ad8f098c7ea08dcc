"""Command-line entry point for the site dumper."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Sequence

from .config import CrawlConfig, DEFAULT_REQUEST_TIMEOUT, DEFAULT_USER_AGENT
from .crawler import crawl_and_archive

logger = logging.getLogger("site_dump.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Crawl a website breadth-first and dump its readable text and images "
            "into a directory and zip archive."
        ),
    )
    parser.add_argument("url", help="Start URL (http or https)")
    parser.add_argument(
        "--output",
        default="output",
        type=Path,
        help="Directory under which the crawl directory and archive are written",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_REQUEST_TIMEOUT,
        help="Per-request timeout in seconds for pages and images",
    )
    parser.add_argument(
        "--user-agent",
        default=DEFAULT_USER_AGENT,
        help="User-Agent header sent with every request",
    )
    parser.add_argument(
        "--no-archive",
        action="store_true",
        help="Skip creating the zip archive",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def _log_progress(progress: int, status: str) -> None:
    logger.info("[%3d%%] %s", progress, status)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    config = CrawlConfig(
        output_root=Path(args.output).resolve(),
        request_timeout=args.timeout,
        user_agent=args.user_agent,
        create_archive=not args.no_archive,
    )

    overall_start = time.perf_counter()
    result = crawl_and_archive(args.url, config, progress=_log_progress)
    total_elapsed = time.perf_counter() - overall_start

    if not result.success:
        logger.error("Crawl failed after %.2fs: %s", total_elapsed, result.error)
        sys.exit(1)

    logger.info(
        "Finished in %.2fs (%d pages, %d images) -> %s",
        total_elapsed,
        result.pages_visited,
        result.images_downloaded,
        result.output_dir,
    )
    if result.archive_path:
        logger.info("Archive written to %s", result.archive_path)


if __name__ == "__main__":
    main()
