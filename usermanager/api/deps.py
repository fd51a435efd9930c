"""Request dependencies: session-scoped store, authentication and role authorization."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyCookie, APIKeyHeader
from sqlalchemy.orm import Session

from usermanager.core.database import get_db
from usermanager.core.security import InvalidCredentialError, decode_access_token
from usermanager.models import Role
from usermanager.schemas.auth import Identity
from usermanager.services.user_store import UserStore

AUTH_COOKIE_NAME = "auth_token"
AUTH_HEADER_NAME = "x-auth-token"

cookie_scheme = APIKeyCookie(name=AUTH_COOKIE_NAME, auto_error=False)
header_scheme = APIKeyHeader(name=AUTH_HEADER_NAME, auto_error=False)


def get_user_store(db: Annotated[Session, Depends(get_db)]) -> UserStore:
    return UserStore(db)


def get_current_user(
    cookie_token: Annotated[str | None, Depends(cookie_scheme)],
    header_token: Annotated[str | None, Depends(header_scheme)],
) -> Identity:
    """
    Dependency: authenticate from the auth_token cookie, falling back to the
    x-auth-token header. Missing and invalid credentials both raise the same 401.
    """
    token = cookie_token or header_token
    unauthenticated = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
    )
    if not token:
        raise unauthenticated
    try:
        return decode_access_token(token)
    except InvalidCredentialError:
        raise unauthenticated


def require_roles(*roles: Role) -> Callable[..., Identity]:
    """Build a dependency that admits only the given roles (403 otherwise). No I/O."""
    allowed = frozenset(roles)

    def dependency(current_user: Annotated[Identity, Depends(get_current_user)]) -> Identity:
        if current_user.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Forbidden: You do not have permission to access this resource",
            )
        return current_user

    return dependency


require_admin = require_roles(Role.ADMIN)

CurrentUser = Annotated[Identity, Depends(get_current_user)]
AdminUser = Annotated[Identity, Depends(require_admin)]
Store = Annotated[UserStore, Depends(get_user_store)]
