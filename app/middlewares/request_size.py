"""
Request body size limit.

Checks the declared Content-Length up front and counts the bytes actually
received, so chunked uploads are limited as well.
"""
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from core.exceptions import BadRequestError, PayloadTooLargeError


class RequestSizeLimitMiddleware:
    def __init__(self, app: ASGIApp, max_body_size: int):
        self.app = app
        self.max_body_size = max_body_size

    def _too_large(self, length: int) -> PayloadTooLargeError:
        return PayloadTooLargeError(
            f"Request body of {length} bytes exceeds the limit of {self.max_body_size} bytes"
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = Headers(scope=scope).get("content-length")
        if declared is not None:
            try:
                length = int(declared)
            except ValueError:
                raise BadRequestError("Invalid Content-Length header")
            if length > self.max_body_size:
                raise self._too_large(length)

        received = 0
        exceeded = False
        started = False

        async def limited_receive() -> Message:
            nonlocal received, exceeded
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_size:
                    exceeded = True
                    raise self._too_large(received)
            return message

        async def guarded_send(message: Message) -> None:
            nonlocal started
            # The app's own error for the truncated body is replaced by a 413
            if exceeded and not started:
                return
            started = True
            await send(message)

        try:
            await self.app(scope, limited_receive, guarded_send)
        except Exception as exc:
            if exceeded and not started:
                raise self._too_large(received) from exc
            raise
        if exceeded and not started:
            raise self._too_large(received)
