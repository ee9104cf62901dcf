"""
Background job endpoints for the gateway API.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from api.deps import get_app_settings, get_current_user, get_job_service, require_roles
from core.config import Settings
from core.constants import Roles
from middlewares.authentication import GatewayUser
from models.jobs import JobEnqueued, JobStatus
from services.job_service import JobService

router = APIRouter()


@router.post("/purge-files", response_model=JobEnqueued, status_code=status.HTTP_202_ACCEPTED)
def purge_files(
    max_age_days: Optional[int] = Query(None, ge=1),
    app_settings: Settings = Depends(get_app_settings),
    job_service: JobService = Depends(get_job_service),
    _: GatewayUser = Depends(require_roles(Roles.ADMIN))
):
    """立即排程清除過期檔案"""
    if max_age_days is None:
        max_age_days = app_settings.jobs.file_retention_days
    return job_service.enqueue_file_purge(str(app_settings.files_root), max_age_days)


@router.get("/{job_id}", response_model=JobStatus)
def get_job(
    job_id: str,
    job_service: JobService = Depends(get_job_service),
    _: GatewayUser = Depends(get_current_user)
):
    return job_service.get_status(job_id)
