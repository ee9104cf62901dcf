"""
Registry of recently enqueued jobs.

Celery result stores can only answer "what is the state of job X"; the
dashboard also needs "which jobs were enqueued lately", which this keeps.
With memory storage the outcome of eagerly executed jobs is kept here too,
since the in-memory result backend is not shared between threads.
"""
import threading
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional


class JobRegistry:
    """
    Thread-safe bounded store with TTL support.

    The oldest entry is evicted when full.
    """

    def __init__(self, maxsize: int = 500, ttl_seconds: int = 86400):
        self._jobs: Dict[str, dict] = {}
        self._lock = threading.RLock()
        self._maxsize = maxsize
        self._ttl = timedelta(seconds=ttl_seconds)

    def _expired(self, entry: dict, now: datetime) -> bool:
        return now - entry["enqueued_at"] > self._ttl

    def record(self, job_id: str, task: str, outcome: Optional[dict] = None) -> dict:
        """
        Record a newly enqueued job.

        outcome holds state/result/error for jobs that already ran in-process.
        """
        now = datetime.now(timezone.utc)
        entry = {"job_id": job_id, "task": task, "enqueued_at": now, "outcome": outcome}
        with self._lock:
            if len(self._jobs) >= self._maxsize and job_id not in self._jobs:
                oldest = min(self._jobs, key=lambda k: self._jobs[k]["enqueued_at"])
                del self._jobs[oldest]
            self._jobs[job_id] = entry
        return entry

    def get(self, job_id: str) -> Optional[dict]:
        with self._lock:
            entry = self._jobs.get(job_id)
            if entry is None:
                return None
            if self._expired(entry, datetime.now(timezone.utc)):
                del self._jobs[job_id]
                return None
            return entry

    def recent(self, limit: int = 50) -> List[dict]:
        """Newest first."""
        now = datetime.now(timezone.utc)
        with self._lock:
            for job_id in [k for k, v in self._jobs.items() if self._expired(v, now)]:
                del self._jobs[job_id]
            entries = sorted(self._jobs.values(), key=lambda e: e["enqueued_at"], reverse=True)
        return entries[:limit]

    def clear(self) -> None:
        with self._lock:
            self._jobs.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)
