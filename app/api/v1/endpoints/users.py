"""
User management endpoints for the gateway API.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from api.deps import get_current_user, get_user_repository, require_roles
from core.constants import Roles
from middlewares.authentication import GatewayUser
from models.users import UserCreateRequest, UserProfile
from repositories.user_repository import UserRepositoryInterface
from services.user_service import user_service

router = APIRouter()


@router.post("", response_model=UserProfile, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: UserCreateRequest,
    repo: UserRepositoryInterface = Depends(get_user_repository),
    _: GatewayUser = Depends(require_roles(Roles.ADMIN))
):
    return await user_service.create_user(repo, request)


@router.get("", response_model=List[UserProfile])
async def list_users(
    active_only: bool = True,
    repo: UserRepositoryInterface = Depends(get_user_repository),
    _: GatewayUser = Depends(require_roles(Roles.ADMIN))
):
    return await user_service.list_users(repo, active_only)


@router.get("/{user_id}", response_model=UserProfile)
async def get_user(
    user_id: str,
    repo: UserRepositoryInterface = Depends(get_user_repository),
    user: GatewayUser = Depends(get_current_user)
):
    """管理員可查看任何人，一般使用者只能查看自己"""
    if user.role != Roles.ADMIN and user.user_id != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Users may only view their own profile"
        )
    return await user_service.get_user(repo, user_id)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def deactivate_user(
    user_id: str,
    repo: UserRepositoryInterface = Depends(get_user_repository),
    _: GatewayUser = Depends(require_roles(Roles.ADMIN))
):
    await user_service.deactivate_user(repo, user_id)
