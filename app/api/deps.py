"""
API dependencies for the gateway.

Dependency providers for repositories and business services, plus the
authentication and authorization guards used by the endpoints.
"""
from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Callable, Optional
import ipaddress
import logging

from core.config import Settings
from db.database import get_db_session
from middlewares.authentication import GatewayUser
from repositories.file_storage import FileStorageRepository
from repositories.user_repository import SqlAlchemyUserRepository, UserRepositoryInterface
from services.file_service import FileService
from services.job_service import JobService

logger = logging.getLogger(__name__)

# Documents the bearer scheme in OpenAPI; the token itself is read by the
# authentication middleware
optional_security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def is_internal_request(request: Request) -> bool:
    """檢查是否為內部請求"""
    if request.client is None:
        return False
    client_ip = request.client.host

    # Docker 內部網路 IP 範圍
    internal_networks = [
        ipaddress.ip_network("172.16.0.0/12"),  # Docker default bridge
        ipaddress.ip_network("10.0.0.0/8"),    # Private network
        ipaddress.ip_network("192.168.0.0/16"), # Private network
        ipaddress.ip_network("127.0.0.0/8"),   # Localhost
    ]

    try:
        client_addr = ipaddress.ip_address(client_ip)
        return any(client_addr in network for network in internal_networks)
    except ValueError:
        return False


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security)
) -> GatewayUser:
    """要求已驗證的使用者"""
    user = request.scope.get("user")
    if not isinstance(user, GatewayUser):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_roles(*roles: str) -> Callable[..., GatewayUser]:
    """Dependency factory: the current user must hold one of the roles."""

    def _check(user: GatewayUser = Depends(get_current_user)) -> GatewayUser:
        if user.role not in roles:
            logger.warning(f"User {user.user_name} ({user.role}) denied, requires one of {roles}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required role: {', '.join(roles)}"
            )
        return user

    return _check


def get_user_repository(session: AsyncSession = Depends(get_db_session)) -> UserRepositoryInterface:
    return SqlAlchemyUserRepository(session)


def get_file_storage(app_settings: Settings = Depends(get_app_settings)) -> FileStorageRepository:
    return FileStorageRepository(app_settings.files_root)


def get_file_service(app_settings: Settings = Depends(get_app_settings)) -> FileService:
    return FileService(app_settings.files_path)


def get_job_service(request: Request) -> JobService:
    return request.app.state.job_service
