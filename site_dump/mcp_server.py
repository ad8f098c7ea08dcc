"""MCP server exposing site-dump crawl tools."""

from __future__ import annotations

import asyncio
import logging
import os
import tempfile
from pathlib import Path
from typing import Callable

from mcp.server.fastmcp import FastMCP

from .config import CrawlConfig, DEFAULT_REQUEST_TIMEOUT
from .crawler import crawl_and_archive
from .jobs import JobRegistry

logger = logging.getLogger("site_dump.mcp")

ConfigFactory = Callable[[], CrawlConfig]


def config_from_env() -> CrawlConfig:
    """Build a CrawlConfig from SITE_DUMP_OUTPUT and SITE_DUMP_TIMEOUT."""
    default_root = Path(tempfile.gettempdir()) / "site-dump"
    output_root = Path(os.getenv("SITE_DUMP_OUTPUT", str(default_root))).expanduser()
    timeout = DEFAULT_REQUEST_TIMEOUT
    raw_timeout = os.getenv("SITE_DUMP_TIMEOUT")
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            logger.warning(
                "SITE_DUMP_TIMEOUT=%r is not a number; using %.1fs", raw_timeout, timeout
            )
    return CrawlConfig(output_root=output_root, request_timeout=timeout)


def run_crawl_job(url: str, config: CrawlConfig, registry: JobRegistry) -> dict:
    """Run one crawl under the registry; refuses a URL that is already being crawled."""
    if registry.start(url) is None:
        return {"success": False, "error": "Job already running"}
    try:
        result = crawl_and_archive(url, config, progress=registry.progress_callback(url))
    finally:
        registry.finish(url)
    return result.as_dict()


def build_server(registry: JobRegistry, config_factory: ConfigFactory = config_from_env) -> FastMCP:
    """Create the MCP server with its tools bound to the given registry."""
    server = FastMCP(name="site-dump")

    @server.tool()
    async def crawl(url: str) -> dict:
        """Crawl a website from a start URL and package its text and images into a zip archive."""
        return await asyncio.to_thread(run_crawl_job, url, config_factory(), registry)

    @server.tool()
    async def crawl_status(url: str) -> dict:
        """Report the latest progress of an active crawl for a URL."""
        state = registry.snapshot(url)
        if state is None:
            return {"active": False}
        return {"active": True, **state}

    return server


def main() -> None:
    """Entry point for running the MCP server."""
    logging.basicConfig(level=logging.ERROR)
    build_server(JobRegistry()).run()


if __name__ == "__main__":
    main()
