"""
User management service for the gateway API.
"""
import logging
from typing import List

from core.constants import Roles
from core.exceptions import BadRequestError, ConflictError, NotFoundError
from models.mapping import user_to_profile
from models.users import UserCreateRequest, UserProfile
from repositories.user_repository import UserRepositoryInterface
from utils.hashing import hash_password

logger = logging.getLogger(__name__)

KNOWN_ROLES = (Roles.ADMIN, Roles.USER)


class UserService:
    """用戶管理服務類"""

    async def create_user(self, repo: UserRepositoryInterface, request: UserCreateRequest) -> UserProfile:
        """
        Create a user with a hashed password.

        Raises:
            BadRequestError: unknown role
            ConflictError: username already taken
        """
        if request.role not in KNOWN_ROLES:
            raise BadRequestError(f"Unknown role '{request.role}'")
        if await repo.get_by_username(request.username) is not None:
            raise ConflictError(f"User '{request.username}' already exists")

        user = await repo.create(
            username=request.username,
            password_hash=hash_password(request.password),
            full_name=request.full_name,
            role=request.role,
        )
        logger.info(f"Created user '{user.username}' with role {user.role}")
        return user_to_profile(user)

    async def get_user(self, repo: UserRepositoryInterface, user_id: str) -> UserProfile:
        user = await repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User '{user_id}' not found")
        return user_to_profile(user)

    async def list_users(self, repo: UserRepositoryInterface, active_only: bool = True) -> List[UserProfile]:
        return [user_to_profile(user) for user in await repo.list_users(active_only)]

    async def deactivate_user(self, repo: UserRepositoryInterface, user_id: str) -> None:
        if not await repo.deactivate(user_id):
            raise NotFoundError(f"User '{user_id}' not found")
        logger.info(f"Deactivated user {user_id}")


# Global instance
user_service = UserService()
