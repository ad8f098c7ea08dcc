"""Registry of crawl jobs that are currently running, keyed by URL."""

from __future__ import annotations

import base64
import threading
from dataclasses import asdict, dataclass
from typing import Dict, Optional

from .crawler import ProgressCallback


def job_id_for(url: str) -> str:
    """Stable, filesystem-friendly identifier derived from the URL."""
    encoded = base64.b64encode(url.encode("utf-8")).decode("ascii")
    return encoded.translate(str.maketrans("", "", "/+="))


@dataclass
class JobState:
    """Latest progress reported by an active crawl."""

    url: str
    job_id: str
    progress: int = 0
    status: str = "Starting crawler..."


class JobRegistry:
    """Thread-safe mapping of active crawl jobs.

    A job is inserted when a crawl starts and removed when it ends or fails, so
    a second request for the same URL can be refused while the first is running.
    """

    def __init__(self) -> None:
        self._jobs: Dict[str, JobState] = {}
        self._lock = threading.Lock()

    def start(self, url: str) -> Optional[JobState]:
        """Register a job; returns None if one is already running for the URL."""
        with self._lock:
            if url in self._jobs:
                return None
            state = JobState(url=url, job_id=job_id_for(url))
            self._jobs[url] = state
            return state

    def update(self, url: str, progress: int, status: str) -> None:
        with self._lock:
            state = self._jobs.get(url)
            if state is not None:
                state.progress = progress
                state.status = status

    def finish(self, url: str) -> None:
        with self._lock:
            self._jobs.pop(url, None)

    def is_active(self, url: str) -> bool:
        with self._lock:
            return url in self._jobs

    def snapshot(self, url: str) -> Optional[dict]:
        """Copy of the job's state, safe to hand to another thread."""
        with self._lock:
            state = self._jobs.get(url)
            return asdict(state) if state else None

    def progress_callback(self, url: str) -> ProgressCallback:
        """Progress observer that records events against this job only."""

        def _report(progress: int, status: str) -> None:
            self.update(url, progress, status)

        return _report

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)
