"""Password hashing and JWT issuance/verification for authentication."""

import secrets
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
import jwt
from pydantic import ValidationError

from usermanager.core.config import settings
from usermanager.schemas.auth import Identity


class InvalidCredentialError(Exception):
    """Token is malformed, badly signed, expired or missing required claims."""


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str | None) -> bool:
    """Verify a plain password against a stored hash."""
    if not hashed:
        return False
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password(secrets.token_urlsafe(16))


def verify_against_dummy_hash(plain_password: str) -> bool:
    """Run a full bcrypt check for a login whose user does not exist. Always False."""
    verify_password(plain_password, _dummy_hash())
    return False


def issue_token(
    payload: dict[str, Any],
    secret: str,
    ttl_seconds: int,
    algorithm: str = "HS256",
) -> str:
    """Sign payload with iat=now and exp=now+ttl_seconds."""
    now = datetime.now(UTC)
    claims = dict(payload)
    claims["iat"] = now
    claims["exp"] = now + timedelta(seconds=ttl_seconds)
    return jwt.encode(claims, secret, algorithm=algorithm)


def verify_token(token: str, secret: str, algorithm: str = "HS256") -> dict[str, Any]:
    """
    Decode and validate a token; return its claims.
    Raises InvalidCredentialError for any signature, structure or expiry failure.
    """
    try:
        return jwt.decode(token, secret, algorithms=[algorithm])
    except jwt.PyJWTError as e:
        raise InvalidCredentialError(str(e)) from e


def create_access_token(identity: Identity) -> str:
    """Create the session token for identity using the configured secret and lifetime."""
    return issue_token(
        {
            "sub": str(identity.id),
            "username": identity.username,
            "role": identity.role.value,
        },
        settings.JWT_SECRET.get_secret_value(),
        settings.JWT_EXPIRATION,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> Identity:
    """Verify a session token and return the identity it carries."""
    claims = verify_token(
        token,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )
    try:
        return Identity(
            id=int(claims["sub"]),
            username=claims["username"],
            role=claims["role"],
        )
    except (KeyError, TypeError, ValueError, ValidationError) as e:
        raise InvalidCredentialError("Invalid token payload") from e
