"""
Error handling middleware for the gateway API.

Converts GatewayError subclasses into JSON responses and turns anything
unexpected into a 500. In development the response also carries the
exception detail and traceback.
"""
import logging
import traceback

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from core.exceptions import GatewayError

logger = logging.getLogger(__name__)


def error_body(code: str, message: str, status_code: int) -> dict:
    return {"error": code, "message": message, "status": status_code}


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, show_details: bool = False):
        super().__init__(app)
        self.show_details = show_details

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except GatewayError as exc:
            if exc.status_code >= 500:
                logger.error(f"{request.method} {request.url.path} failed: {exc.code}: {exc.message}")
            else:
                logger.warning(f"{request.method} {request.url.path} rejected: {exc.code}: {exc.message}")
            return JSONResponse(
                status_code=exc.status_code,
                content=error_body(exc.code, exc.message, exc.status_code),
            )
        except Exception as exc:
            logger.exception(f"Unhandled error on {request.method} {request.url.path}")
            body = error_body("internal_error", "An unexpected error occurred", 500)
            if self.show_details:
                body["detail"] = f"{type(exc).__name__}: {exc}"
                body["trace"] = traceback.format_exception(type(exc), exc, exc.__traceback__)
            return JSONResponse(status_code=500, content=body)
