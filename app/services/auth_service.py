"""
Authentication service for the gateway API.

Issues and validates JWT access tokens carrying the gateway claims, and checks
user credentials against the user repository.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from core.config import JwtSettings
from core.constants import ClaimConstants
from core.exceptions import UnauthorizedError
from models.auth import Token, TokenData
from models.db_models import User
from models.mapping import user_to_claims
from repositories.user_repository import UserRepositoryInterface
from utils.hashing import check_needs_rehash, hash_password, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    """認證服務類"""

    def __init__(self, jwt_settings: JwtSettings):
        self._jwt = jwt_settings

    def create_access_token(self, user: User, expires_delta: Optional[timedelta] = None) -> Token:
        """Create a signed JWT for the user."""
        if expires_delta is None:
            expires_delta = timedelta(minutes=self._jwt.access_token_expire_minutes)
        now = datetime.now(timezone.utc)

        to_encode = user_to_claims(user)
        to_encode.update({
            "sub": user.id,
            "iss": self._jwt.issuer,
            "aud": self._jwt.effective_audience,
            "iat": now,
            "exp": now + expires_delta,
        })
        encoded_jwt = jwt.encode(to_encode, self._jwt.key, algorithm=self._jwt.algorithm)
        return Token(access_token=encoded_jwt, expires_in=int(expires_delta.total_seconds()))

    def decode_access_token(self, token: str) -> TokenData:
        """
        Validate signature, expiry, issuer and audience.

        Raises:
            UnauthorizedError: if the token is invalid or lacks the user id claim
        """
        try:
            payload = jwt.decode(
                token,
                self._jwt.key,
                algorithms=[self._jwt.algorithm],
                audience=self._jwt.effective_audience,
                issuer=self._jwt.issuer,
            )
        except JWTError as e:
            raise UnauthorizedError(f"Could not validate credentials: {e}")

        user_id = payload.get(ClaimConstants.USER_ID)
        if not user_id:
            raise UnauthorizedError("Token is missing the user id claim")

        return TokenData(
            user_id=user_id,
            user_name=payload.get(ClaimConstants.USER_NAME),
            full_name=payload.get(ClaimConstants.FULL_NAME),
            role=payload.get(ClaimConstants.ROLE),
        )

    async def authenticate_user(
        self,
        repo: UserRepositoryInterface,
        username: str,
        password: str
    ) -> User:
        """
        Check credentials and record the login.

        Unknown users, wrong passwords and inactive accounts all fail the
        same way so callers cannot probe which usernames exist.
        """
        user = await repo.get_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning(f"Login failed for '{username}'")
            raise UnauthorizedError("Invalid username or password")
        if not user.is_active:
            logger.warning(f"Login refused for inactive user '{username}'")
            raise UnauthorizedError("Invalid username or password")

        if check_needs_rehash(user.password_hash):
            await repo.update_password_hash(user.id, hash_password(password))
        await repo.record_login(user.id)

        logger.info(f"User '{username}' logged in")
        return user

