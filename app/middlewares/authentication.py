"""
JWT authentication for the gateway pipeline.

Populates request.user from a bearer token (Authorization header, or the auth
cookie for browser requests such as static files). Requests without a valid
token stay anonymous; endpoints decide whether that is acceptable.
"""
import logging
from typing import Optional, Tuple

from starlette.authentication import (
    AuthCredentials,
    AuthenticationBackend,
    BaseUser,
)
from starlette.requests import HTTPConnection

from core.config import JwtSettings
from core.exceptions import UnauthorizedError
from models.auth import TokenData
from services.auth_service import AuthService

logger = logging.getLogger(__name__)


class GatewayUser(BaseUser):
    """Authenticated identity built from token claims."""

    def __init__(self, token_data: TokenData):
        self.token_data = token_data

    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def display_name(self) -> str:
        return self.token_data.full_name or self.token_data.user_name or self.token_data.user_id

    @property
    def identity(self) -> str:
        return self.token_data.user_id

    @property
    def user_id(self) -> str:
        return self.token_data.user_id

    @property
    def user_name(self) -> Optional[str]:
        return self.token_data.user_name

    @property
    def full_name(self) -> Optional[str]:
        return self.token_data.full_name

    @property
    def role(self) -> Optional[str]:
        return self.token_data.role


def extract_token(conn: HTTPConnection, cookie_name: str) -> Optional[str]:
    authorization = conn.headers.get("Authorization")
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
        return None
    return conn.cookies.get(cookie_name) or None


class JwtAuthBackend(AuthenticationBackend):
    def __init__(self, jwt_settings: JwtSettings):
        self._cookie_name = jwt_settings.cookie_name
        self._auth_service = AuthService(jwt_settings)

    async def authenticate(self, conn: HTTPConnection) -> Optional[Tuple[AuthCredentials, BaseUser]]:
        token = extract_token(conn, self._cookie_name)
        if token is None:
            return None

        try:
            token_data = self._auth_service.decode_access_token(token)
        except UnauthorizedError as e:
            logger.debug(f"Ignoring invalid token on {conn.url.path}: {e.message}")
            return None

        scopes = ["authenticated"]
        if token_data.role:
            scopes.append(token_data.role)
        return AuthCredentials(scopes), GatewayUser(token_data)
