"""
API versioning for the gateway.

Versions live in the URL (/api/v1/...). Requests without a version segment
(/api/...) are served by the default version. Every API response reports the
supported versions; an explicit unsupported api-version is rejected.
"""
from dataclasses import dataclass
from typing import List, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from core.exceptions import UnsupportedApiVersionError

API_PREFIX = "/api"
VERSION_QUERY_PARAM = "api-version"
VERSION_HEADER = "api-version"
SUPPORTED_VERSIONS_HEADER = "api-supported-versions"


@dataclass(frozen=True, order=True)
class ApiVersion:
    major: int
    minor: int = 0

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"

    @property
    def group_name(self) -> str:
        """Group name used in URLs and OpenAPI documents, e.g. "v1"."""
        if self.minor:
            return f"v{self.major}.{self.minor}"
        return f"v{self.major}"

    @property
    def url_prefix(self) -> str:
        return f"{API_PREFIX}/{self.group_name}"

    @classmethod
    def parse(cls, raw: str) -> "ApiVersion":
        """Parse "1", "1.0" or "v1"."""
        text = raw.strip().lower().lstrip("v")
        parts = text.split(".")
        if not parts or len(parts) > 2 or not all(p.isdigit() for p in parts):
            raise UnsupportedApiVersionError(f"Invalid API version '{raw}'")
        major = int(parts[0])
        minor = int(parts[1]) if len(parts) == 2 else 0
        return cls(major, minor)


DEFAULT_API_VERSION = ApiVersion(1, 0)
SUPPORTED_API_VERSIONS: List[ApiVersion] = [DEFAULT_API_VERSION]


def requested_version(request: Request) -> Optional[ApiVersion]:
    """The version named explicitly by the request, if any."""
    raw = request.query_params.get(VERSION_QUERY_PARAM) or request.headers.get(VERSION_HEADER)
    if raw:
        return ApiVersion.parse(raw)

    # /api/v1/... carries the version in the path
    segments = request.url.path.split("/")
    if len(segments) > 2 and f"/{segments[1]}" == API_PREFIX and segments[2][:1] == "v":
        candidate = segments[2]
        if candidate[1:2].isdigit():
            return ApiVersion.parse(candidate)
    return None


def supported_versions_header() -> str:
    return ", ".join(str(v) for v in sorted(SUPPORTED_API_VERSIONS))


class ApiVersionMiddleware(BaseHTTPMiddleware):
    """Validates the requested version and reports supported versions."""

    async def dispatch(self, request: Request, call_next):
        if not request.url.path.startswith(API_PREFIX):
            return await call_next(request)

        version = requested_version(request) or DEFAULT_API_VERSION
        if version not in SUPPORTED_API_VERSIONS:
            raise UnsupportedApiVersionError(
                f"API version '{version}' is not supported. "
                f"Supported versions: {supported_versions_header()}"
            )
        request.state.api_version = version

        response = await call_next(request)
        response.headers[SUPPORTED_VERSIONS_HEADER] = supported_versions_header()
        return response
