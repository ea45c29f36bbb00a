# ============================================================================
# HTTP MIDDLEWARE
# ============================================================================
# Security headers, a fixed-window per-client rate limit, a request body size
# cap, and a catch-all for unexpected errors. Rejections use the same
# {success, message} envelope as the API.
# ============================================================================

import logging
import time
from typing import Callable, Dict, Tuple

from fastapi import Request, status
from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware

from core.errors import error_response


logger = logging.getLogger(__name__)


SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
}

BODY_TOO_LARGE = "Request body too large"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Allows `max_requests` per client address in each fixed window of `window_seconds`."""

    def __init__(self, app, max_requests: int = 1000, window_seconds: int = 60, clock: Callable[[], float] = time.monotonic):
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        self._windows: Dict[str, Tuple[float, int]] = {}
        self._last_sweep = clock()

    def _sweep(self, now: float) -> None:
        # Drop windows that have already expired, at most once per window.
        if now - self._last_sweep < self.window_seconds:
            return
        self._last_sweep = now
        expired = [key for key, (started, _) in self._windows.items() if now - started >= self.window_seconds]
        for key in expired:
            del self._windows[key]

    def _hit(self, client_key: str) -> Tuple[bool, int, float]:
        now = self.clock()
        self._sweep(now)
        started, count = self._windows.get(client_key, (now, 0))
        if now - started >= self.window_seconds:
            started, count = now, 0
        count += 1
        self._windows[client_key] = (started, count)
        reset_in = max(self.window_seconds - (now - started), 0)
        return count <= self.max_requests, max(self.max_requests - count, 0), reset_in

    async def dispatch(self, request: Request, call_next):
        client_key = request.client.host if request.client else "unknown"
        allowed, remaining, reset_in = self._hit(client_key)
        if not allowed:
            logger.warning("Rate limit exceeded for %s", client_key)
            return error_response(
                status.HTTP_429_TOO_MANY_REQUESTS,
                "Too many requests, please try again later.",
                headers={"Retry-After": str(int(reset_in) + 1)},
            )
        response = await call_next(request)
        response.headers["RateLimit-Limit"] = str(self.max_requests)
        response.headers["RateLimit-Remaining"] = str(remaining)
        return response


class BodySizeLimitMiddleware:
    """
    Caps request bodies at `max_bytes`. A declared Content-Length over the cap is
    refused up front. Bodies without one (chunked) are read here, counting bytes
    as they arrive, and replayed to the app once complete.
    """

    def __init__(self, app, max_bytes: int = 10 * 1024 * 1024):
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = Headers(scope=scope).get("content-length")
        if declared is not None:
            try:
                too_large = int(declared) > self.max_bytes
            except ValueError:
                await error_response(status.HTTP_400_BAD_REQUEST, "Invalid Content-Length header")(scope, receive, send)
                return
            if too_large:
                await error_response(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, BODY_TOO_LARGE)(scope, receive, send)
                return
            await self.app(scope, receive, send)
            return

        chunks = []
        received = 0
        while True:
            message = await receive()
            if message["type"] != "http.request":
                break
            body = message.get("body", b"")
            received += len(body)
            if received > self.max_bytes:
                logger.warning("Streamed body passed %d bytes on %s", self.max_bytes, scope.get("path"))
                await error_response(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, BODY_TOO_LARGE)(scope, receive, send)
                return
            chunks.append(body)
            if not message.get("more_body", False):
                message = {"type": "http.request", "body": b"".join(chunks), "more_body": False}
                break

        pending = [message]

        async def replay():
            if pending:
                return pending.pop()
            return await receive()

        await self.app(scope, replay, send)


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Innermost layer: turns unexpected exceptions into the JSON 500 so CORS and security headers still apply."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Something went wrong!")
