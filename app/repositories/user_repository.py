"""
User Repository.

Implements the Repository Pattern over the users table so business services
never touch SQLAlchemy directly.
"""
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models.db_models import User


class UserRepositoryInterface(ABC):
    """Abstract interface for User Repository."""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get a user by id."""
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        """Get a user by username."""
        pass

    @abstractmethod
    async def create(
        self,
        username: str,
        password_hash: str,
        full_name: str,
        role: str
    ) -> User:
        """Create a new user."""
        pass

    @abstractmethod
    async def list_users(self, active_only: bool = True) -> List[User]:
        """List users."""
        pass

    @abstractmethod
    async def deactivate(self, user_id: str) -> bool:
        """Deactivate a user. Returns False if the user does not exist."""
        pass

    @abstractmethod
    async def record_login(self, user_id: str) -> None:
        """Stamp the last login time."""
        pass

    @abstractmethod
    async def update_password_hash(self, user_id: str, password_hash: str) -> None:
        """Replace the stored password hash."""
        pass


class SqlAlchemyUserRepository(UserRepositoryInterface):
    """SQLAlchemy implementation of User Repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, user_id: str) -> Optional[User]:
        return await self._session.get(User, user_id)

    async def get_by_username(self, username: str) -> Optional[User]:
        stmt = select(User).where(User.username == username)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(
        self,
        username: str,
        password_hash: str,
        full_name: str,
        role: str
    ) -> User:
        user = User(
            username=username,
            password_hash=password_hash,
            full_name=full_name,
            role=role,
            is_active=True,
        )
        self._session.add(user)
        await self._session.flush()  # Get the ID and server defaults
        await self._session.refresh(user)
        return user

    async def list_users(self, active_only: bool = True) -> List[User]:
        stmt = select(User)
        if active_only:
            stmt = stmt.where(User.is_active.is_(True))
        stmt = stmt.order_by(User.username)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def deactivate(self, user_id: str) -> bool:
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(is_active=False)
            .returning(User.id)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def record_login(self, user_id: str) -> None:
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(last_login_at=datetime.now(timezone.utc))
        )
        await self._session.execute(stmt)

    async def update_password_hash(self, user_id: str, password_hash: str) -> None:
        stmt = update(User).where(User.id == user_id).values(password_hash=password_hash)
        await self._session.execute(stmt)
