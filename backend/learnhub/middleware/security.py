"""Security and CORS middleware."""

from collections.abc import Awaitable, Callable

from fastapi import Request
from fastapi.responses import Response
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from learnhub.config import get_settings
from learnhub.middleware.error_handlers import handle_unexpected_errors


# In-memory rate limiter keyed by client address
limiter = Limiter(key_func=get_remote_address)


class SimpleSecurityMiddleware(BaseHTTPMiddleware):
    """
    Ultra-simple security middleware.

    Adds essential headers and basic protection.
    """

    def __init__(self, app: ASGIApp, hsts: bool = False) -> None:
        super().__init__(app)
        self.hsts = hsts

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Handle request with security headers."""
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if self.hsts:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response


class PermissiveCORSMiddleware(BaseHTTPMiddleware):
    """
    Cross-origin headers for the browser frontend.

    Every response gets the allow-origin/allow-headers pair, including the
    500 built for an unhandled exception; any OPTIONS request is answered
    directly with 204.
    """

    ALLOW_HEADERS = "Content-Type, x-role"
    ALLOW_METHODS = "GET,POST,PATCH,OPTIONS"

    def __init__(self, app: ASGIApp, allow_origin: str = "*") -> None:
        super().__init__(app)
        self.allow_origin = allow_origin

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Answer preflight requests and decorate everything else."""
        if request.method == "OPTIONS":
            return Response(
                status_code=204,
                headers={
                    "Access-Control-Allow-Origin": self.allow_origin,
                    "Access-Control-Allow-Headers": self.ALLOW_HEADERS,
                    "Access-Control-Allow-Methods": self.ALLOW_METHODS,
                },
            )

        try:
            response = await call_next(request)
        except Exception as exc:
            response = await handle_unexpected_errors(request, exc)

        response.headers["Access-Control-Allow-Origin"] = self.allow_origin
        response.headers["Access-Control-Allow-Headers"] = self.ALLOW_HEADERS
        return response


def create_rate_limit_dependency(
    limit_decorator: Callable[[Callable], Callable],
) -> Callable[[Request], Awaitable[None]]:
    """Create rate limit dependencies from decorators.

    This allows applying rate limits at router level without modifying functions.
    """

    @limit_decorator
    async def rate_limited_dependency(request: Request) -> None:
        """Apply rate limiting to protect router endpoints."""

    return rate_limited_dependency


# Mutating endpoints (course admin, progress, certificates)
write_rate_limit = limiter.limit(lambda: get_settings().WRITE_RATE_LIMIT)
write_route_limit = create_rate_limit_dependency(write_rate_limit)
