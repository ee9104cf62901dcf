"""
Health check endpoints for the gateway API.
"""
from fastapi import APIRouter, Depends

from api.deps import get_app_settings
from core.config import Settings

router = APIRouter()


def service_status(app_settings: Settings) -> dict:
    return {
        "service": app_settings.app_name,
        "status": "running",
        "version": app_settings.version,
        "environment": app_settings.environment,
    }


@router.get("/health", response_model=dict)
async def health(app_settings: Settings = Depends(get_app_settings)):
    """服務狀態檢查"""
    return service_status(app_settings)
