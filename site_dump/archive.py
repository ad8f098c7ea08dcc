"""Zip packaging for finished crawl directories."""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path

logger = logging.getLogger("site_dump")

COMPRESSION_LEVEL = 9


class ArchiveError(RuntimeError):
    """Raised when a crawl directory cannot be packaged."""


def create_zip_archive(source_dir: Path, output_path: Path) -> int:
    """Recursively zip ``source_dir`` into ``output_path`` and return the archive size in bytes.

    Entries are stored relative to ``source_dir``. A file that disappears while
    the archive is being written is logged and skipped; every other error aborts
    the archive and raises ArchiveError.
    """
    source_dir = Path(source_dir)
    output_path = Path(output_path)
    if not source_dir.is_dir():
        raise ArchiveError(f"Source directory does not exist: {source_dir}")

    target = output_path.resolve()
    try:
        with zipfile.ZipFile(
            output_path,
            "w",
            compression=zipfile.ZIP_DEFLATED,
            compresslevel=COMPRESSION_LEVEL,
        ) as archive:
            for path in sorted(source_dir.rglob("*")):
                if path.resolve() == target:
                    continue
                arcname = path.relative_to(source_dir).as_posix()
                try:
                    archive.write(path, arcname)
                except FileNotFoundError as exc:
                    logger.warning("Skipping %s: %s", path, exc)
    except (OSError, zipfile.BadZipFile, ValueError) as exc:
        output_path.unlink(missing_ok=True)
        raise ArchiveError(f"Failed to archive {source_dir}: {exc}") from exc

    total_bytes = output_path.stat().st_size
    logger.info("Archive created: %d total bytes", total_bytes)
    return total_bytes
