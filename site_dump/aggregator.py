"""Assembly of the per-page text dump."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from .models import PageResult

logger = logging.getLogger("site_dump")


def format_page(page: PageResult) -> List[str]:
    """Lines making up one page block: header, URL, cleaned text, then image references."""
    lines = [
        f"\n\n==== PAGE: {page.title} ====",
        f"URL: {page.url}\n",
        page.cleaned_text,
    ]
    for ref in page.image_refs:
        lines.append(f'\nimage["{ref.id}"]: {ref.alt_text}')
    return lines


class ContentAggregator:
    """Accumulates page blocks in visit order and writes them once at the end."""

    def __init__(self) -> None:
        self._lines: List[str] = []
        self.page_count = 0

    def add_page(self, page: PageResult) -> None:
        self._lines.extend(format_page(page))
        self.page_count += 1

    def render(self) -> str:
        return "\n".join(self._lines)

    def write(self, output_path: Path) -> Path:
        """Write the aggregated content; filesystem errors propagate."""
        output_path.write_text(self.render(), encoding="utf-8")
        logger.info("Saved content to %s", output_path)
        return output_path
