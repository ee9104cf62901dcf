"""
Authorization filter for protected static files.

Everything under the files path is private: responses are never cached and
anonymous requests get an empty 401.
"""
import logging
import posixpath

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)


def normalize_path(path: str) -> str:
    """Resolve "." and ".." segments and repeated slashes the way StaticFiles does."""
    return posixpath.normpath("/" + path.lstrip("/"))


def starts_with_segments(path: str, prefix: str) -> bool:
    """
    Segment-aware, case-insensitive prefix match on the normalized path.

    "/files" and "/files/a.txt" match "/files"; "/filesystem" does not,
    "/styles/../files/a.txt" does.
    """
    path = normalize_path(path).lower()
    prefix = prefix.rstrip("/").lower()
    if not prefix:
        return True
    return path == prefix or path.startswith(prefix + "/")


class ProtectedFilesMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, path_prefix: str = "/files"):
        super().__init__(app)
        self.path_prefix = path_prefix

    async def dispatch(self, request: Request, call_next):
        if not starts_with_segments(request.url.path, self.path_prefix):
            return await call_next(request)

        user = request.scope.get("user")
        if user is None or not user.is_authenticated:
            logger.info(f"Anonymous request for protected file rejected: {request.url.path}")
            return Response(status_code=401, headers={"Cache-Control": "no-store"})

        response = await call_next(request)
        response.headers["Cache-Control"] = "no-store"
        return response
