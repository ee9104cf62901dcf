"""
Job dashboard.

Mounted at the configured dashboard path (default /hangfire). Shows the job
storage in use, recurring jobs, worker state and recently enqueued jobs.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from api.deps import get_app_settings, get_job_service, is_internal_request
from core.config import Settings
from middlewares.authentication import GatewayUser
from models.jobs import DashboardSnapshot, JobStatus
from services.job_service import JobService

logger = logging.getLogger(__name__)


def require_dashboard_access(request: Request, app_settings: Settings = Depends(get_app_settings)) -> None:
    """
    Anonymous access only when explicitly enabled; otherwise a dashboard role,
    or an internal-network client when dashboard_allow_internal_network is set.
    """
    jobs = app_settings.jobs
    if jobs.dashboard_allow_anonymous:
        return

    user = request.scope.get("user")
    if isinstance(user, GatewayUser) and user.role in jobs.dashboard_roles:
        return
    if jobs.dashboard_allow_internal_network and is_internal_request(request):
        return

    logger.warning(f"Job dashboard access denied for {request.client.host if request.client else 'unknown'}")
    if isinstance(user, GatewayUser):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied: dashboard role required")
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )


router = APIRouter(dependencies=[Depends(require_dashboard_access)], include_in_schema=False)


@router.get("", response_model=DashboardSnapshot)
def dashboard(job_service: JobService = Depends(get_job_service)):
    return job_service.dashboard_snapshot()


@router.get("/jobs/{job_id}", response_model=JobStatus)
def dashboard_job(job_id: str, job_service: JobService = Depends(get_job_service)):
    return job_service.get_status(job_id)
