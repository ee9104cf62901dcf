"""
Test doubles shared by the gateway API tests.
"""
import asyncio
from typing import Dict, Iterable, List, Optional, Tuple
from uuid import uuid4

from core.constants import Roles
from models.db_models import User
from repositories.user_repository import UserRepositoryInterface
from utils.hashing import hash_password

TEST_PASSWORD = "correct-horse-battery"


class FakeUserRepository(UserRepositoryInterface):
    """In-memory user repository"""

    def __init__(self, users: Optional[List[User]] = None):
        self.users: Dict[str, User] = {u.id: u for u in users or []}
        self.logins: List[str] = []

    async def get_by_id(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    async def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.username == username), None)

    async def create(self, username: str, password_hash: str, full_name: str, role: str) -> User:
        user = User(
            id=str(uuid4()),
            username=username,
            password_hash=password_hash,
            full_name=full_name,
            role=role,
            is_active=True,
        )
        self.users[user.id] = user
        return user

    async def list_users(self, active_only: bool = True) -> List[User]:
        return [u for u in self.users.values() if u.is_active or not active_only]

    async def deactivate(self, user_id: str) -> bool:
        user = self.users.get(user_id)
        if user is None:
            return False
        user.is_active = False
        return True

    async def record_login(self, user_id: str) -> None:
        self.logins.append(user_id)

    async def update_password_hash(self, user_id: str, password_hash: str) -> None:
        self.users[user_id].password_hash = password_hash


def make_user(username: str, role: str = Roles.USER, is_active: bool = True) -> User:
    return User(
        id=str(uuid4()),
        username=username,
        full_name=username.title(),
        role=role,
        password_hash=hash_password(TEST_PASSWORD),
        is_active=is_active,
    )


async def _asgi_get(app, path: str, headers: Iterable[Tuple[str, str]], client: Tuple[str, int]):
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "scheme": "http",
        "path": path,
        "raw_path": path.encode(),
        "root_path": "",
        "query_string": b"",
        "headers": [(b"host", b"testserver")] + [(k.lower().encode(), v.encode()) for k, v in headers],
        "client": client,
        "server": ("testserver", 80),
    }
    messages = []
    request_sent = False
    response_done = asyncio.Event()

    async def receive():
        nonlocal request_sent
        if not request_sent:
            request_sent = True
            return {"type": "http.request", "body": b"", "more_body": False}
        await response_done.wait()
        return {"type": "http.disconnect"}

    async def send(message):
        messages.append(message)
        if message["type"] == "http.response.body" and not message.get("more_body", False):
            response_done.set()

    await app(scope, receive, send)

    start = next(m for m in messages if m["type"] == "http.response.start")
    response_headers = {k.decode().lower(): v.decode() for k, v in start["headers"]}
    body = b"".join(m.get("body", b"") for m in messages if m["type"] == "http.response.body")
    return start["status"], response_headers, body


def asgi_get(app, path: str, headers: Optional[Dict[str, str]] = None, client: Tuple[str, int] = ("testclient", 50000)):
    """
    GET through the ASGI interface with the path exactly as given.

    HTTP clients collapse "." and ".." segments before sending; servers such
    as uvicorn pass them through unchanged.
    """
    return asyncio.run(_asgi_get(app, path, (headers or {}).items(), client))
