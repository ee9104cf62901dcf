"""
Background job models for the gateway API.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class JobEnqueued(BaseModel):
    """Response for a newly enqueued job"""
    job_id: str
    task: str
    status: str


class JobStatus(BaseModel):
    job_id: str
    task: Optional[str] = None
    status: str
    enqueued_at: Optional[datetime] = None
    result: Optional[Any] = None
    error: Optional[str] = None


class RecurringJob(BaseModel):
    name: str
    task: str
    schedule: str


class DashboardSnapshot(BaseModel):
    """Job dashboard payload"""
    storage: str
    broker: str
    result_backend: str
    eager: bool
    recurring_jobs: List[RecurringJob]
    workers: Optional[Dict[str, Any]] = None
    recent_jobs: List[JobStatus]
