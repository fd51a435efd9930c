"""CSRF protection using the double-submit cookie pattern.

GET /api/csrf-token places a random secret in an HTTP-only cookie and hands the
client a token derived from it. State-changing requests must echo the token in
a header; it is checked against the secret in the cookie.
"""

import base64
import hashlib
import hmac
import secrets

from fastapi import HTTPException, Request, Response, status

from usermanager.core.config import settings

CSRF_COOKIE_NAME = "_csrf"
CSRF_HEADER_NAMES = ("csrf-token", "x-csrf-token", "xsrf-token", "x-xsrf-token")
SAFE_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})


def _digest(secret: str, salt: str) -> str:
    mac = hmac.new(secret.encode("utf-8"), salt.encode("utf-8"), hashlib.sha256).digest()
    return base64.urlsafe_b64encode(mac).rstrip(b"=").decode("ascii")


def create_csrf_token(secret: str) -> str:
    """Derive a fresh token from secret; many tokens can share one secret."""
    salt = secrets.token_hex(8)
    return f"{salt}-{_digest(secret, salt)}"


def verify_csrf_token(secret: str | None, token: str | None) -> bool:
    if not secret or not token:
        return False
    salt, sep, digest = token.partition("-")
    if not sep or not salt:
        return False
    return hmac.compare_digest(digest, _digest(secret, salt))


def issue_csrf_token(request: Request, response: Response) -> str:
    """Reuse the secret cookie if present, otherwise set a new one; return a token."""
    secret = request.cookies.get(CSRF_COOKIE_NAME)
    if not secret:
        secret = secrets.token_urlsafe(24)
        response.set_cookie(
            CSRF_COOKIE_NAME,
            secret,
            httponly=True,
            secure=settings.cookie_secure,
            samesite="strict",
            path="/",
        )
    return create_csrf_token(secret)


def require_csrf(request: Request) -> None:
    """Dependency: reject state-changing requests without a valid CSRF token (403)."""
    if request.method in SAFE_METHODS:
        return
    token = next(
        (request.headers[h] for h in CSRF_HEADER_NAMES if h in request.headers),
        None,
    )
    if not verify_csrf_token(request.cookies.get(CSRF_COOKIE_NAME), token):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid CSRF token",
        )
