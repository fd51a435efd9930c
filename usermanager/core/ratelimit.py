"""Per-client rate limiting for the auth endpoints (slowapi, in-memory fixed window).

The limit is enforced in ASGI middleware so every request under /api/auth is
counted, including ones later rejected for CSRF, validation or authentication.
"""

import logging

from limits import parse
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from usermanager.core.config import settings
from usermanager.core.middleware import send_json

logger = logging.getLogger(__name__)

AUTH_PATH_PREFIX = "/api/auth"
RATE_LIMIT_MESSAGE = "Too many requests, please try again later."

limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)


class AuthRateLimitMiddleware:
    """Count each request under path_prefix per client address; 429 once AUTH_RATE_LIMIT is spent."""

    def __init__(self, app, path_prefix: str = AUTH_PATH_PREFIX):
        self.app = app
        self.path_prefix = path_prefix

    def _applies(self, path: str) -> bool:
        return path == self.path_prefix or path.startswith(self.path_prefix + "/")

    async def __call__(self, scope, receive, send):  # type: ignore[override]
        if scope.get("type") != "http" or not limiter.enabled or not self._applies(scope.get("path", "")):
            await self.app(scope, receive, send)
            return

        # read on every request so the limit follows the current settings
        limit = parse(settings.AUTH_RATE_LIMIT)
        client = get_remote_address(Request(scope))
        if not limiter.limiter.hit(limit, self.path_prefix, client):
            logger.warning("Rate limit exceeded for %s %s from %s", scope.get("method"), scope["path"], client)
            await send_json(send, 429, {"message": RATE_LIMIT_MESSAGE})
            return

        await self.app(scope, receive, send)
