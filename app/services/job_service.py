"""
Background job service for the gateway API.

Wraps the Celery application: enqueueing, status lookups and the data shown
on the job dashboard.
"""
import logging
from typing import Any, Dict, List, Optional
from uuid import uuid4

from celery import Celery
from celery.result import AsyncResult
from kombu.utils.url import maybe_sanitize_url

from core.config import Settings
from core.exceptions import NotFoundError
from jobs.celery_app import PURGE_EXPIRED_FILES, create_celery_app
from jobs.registry import JobRegistry
from models.jobs import DashboardSnapshot, JobEnqueued, JobStatus, RecurringJob

import jobs.tasks  # noqa: F401  registers the task functions

logger = logging.getLogger(__name__)

# Stored in the result backend before a job is published, so every web
# process sees it before a worker picks it up
SENT = "SENT"


class JobService:
    """背景任務服務類"""

    def __init__(self, app: Celery, registry: JobRegistry):
        self._app = app
        self._registry = registry

    @classmethod
    def from_settings(cls, app_settings: Settings) -> "JobService":
        jobs = app_settings.jobs
        return cls(
            create_celery_app(app_settings),
            JobRegistry(maxsize=jobs.registry_max_size, ttl_seconds=jobs.registry_ttl_seconds),
        )

    @property
    def eager(self) -> bool:
        return bool(self._app.conf.task_always_eager)

    def enqueue(self, task_name: str, *args: Any) -> JobEnqueued:
        """Enqueue a registered task by name."""
        if self.eager:
            result = self._app.tasks[task_name].apply_async(args=args)
            outcome = self._outcome(result)
            self._registry.record(result.id, task_name, outcome=outcome)
            state = outcome["state"]
        else:
            job_id = str(uuid4())
            self._app.backend.store_result(job_id, None, SENT)
            result = self._app.send_task(task_name, args=args, task_id=job_id)
            self._registry.record(result.id, task_name)
            state = SENT
        logger.info(f"Enqueued job {result.id} ({task_name})")
        return JobEnqueued(job_id=result.id, task=task_name, status=state)

    def enqueue_file_purge(self, directory: str, max_age_days: int) -> JobEnqueued:
        return self.enqueue(PURGE_EXPIRED_FILES, directory, max_age_days)

    def get_status(self, job_id: str) -> JobStatus:
        """
        Current state of a job.

        The registry only covers jobs enqueued by this process; jobs sent to
        workers are found through the shared result backend.

        Raises:
            NotFoundError: the job is neither known locally nor to the result store
        """
        entry = self._registry.get(job_id)
        result = AsyncResult(job_id, app=self._app)
        if entry is None and result.state == "PENDING":
            # Celery reports PENDING for ids it has never seen
            raise NotFoundError(f"Job '{job_id}' not found")
        return self._to_status(result, entry)

    @staticmethod
    def _outcome(result: AsyncResult) -> dict:
        outcome = {"state": result.state, "result": None, "error": None}
        if result.state == "SUCCESS":
            outcome["result"] = result.result
        elif result.state == "FAILURE":
            outcome["error"] = repr(result.result)
        return outcome

    def _to_status(self, result: AsyncResult, entry: Optional[dict]) -> JobStatus:
        outcome = entry.get("outcome") if entry else None
        if outcome is None:
            outcome = self._outcome(result)
        return JobStatus(
            job_id=result.id,
            task=entry["task"] if entry else getattr(result, "name", None),
            status=outcome["state"],
            enqueued_at=entry["enqueued_at"] if entry else None,
            result=outcome["result"],
            error=outcome["error"],
        )

    def recent_jobs(self, limit: int = 50) -> List[JobStatus]:
        jobs = []
        for entry in self._registry.recent(limit):
            jobs.append(self._to_status(AsyncResult(entry["job_id"], app=self._app), entry))
        return jobs

    def recurring_jobs(self) -> List[RecurringJob]:
        schedule = self._app.conf.beat_schedule or {}
        return [
            RecurringJob(name=name, task=entry["task"], schedule=str(entry["schedule"]))
            for name, entry in schedule.items()
        ]

    def worker_stats(self) -> Optional[Dict[str, Any]]:
        """Stats from running workers; None when jobs run in-process."""
        if self.eager:
            return None
        try:
            inspector = self._app.control.inspect(timeout=1.0)
            return {
                "stats": inspector.stats() or {},
                "active": inspector.active() or {},
                "scheduled": inspector.scheduled() or {},
            }
        except Exception as e:
            # Not every broker transport supports remote control
            logger.warning(f"Worker inspection failed: {e}")
            return {"error": str(e)}

    def dashboard_snapshot(self) -> DashboardSnapshot:
        return DashboardSnapshot(
            storage="memory" if self.eager else "database",
            broker=maybe_sanitize_url(self._app.conf.broker_url),
            result_backend=maybe_sanitize_url(self._app.conf.result_backend),
            eager=self.eager,
            recurring_jobs=self.recurring_jobs(),
            workers=self.worker_stats(),
            recent_jobs=self.recent_jobs(),
        )

