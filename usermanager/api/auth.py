"""Registration, login, session check and logout. Sessions live in an HTTP-only cookie."""

import logging

from fastapi import APIRouter, HTTPException, Response, status

from usermanager.api.deps import AUTH_COOKIE_NAME, CurrentUser, Store
from usermanager.core.config import settings
from usermanager.core.security import (
    create_access_token,
    hash_password,
    verify_against_dummy_hash,
    verify_password,
)
from usermanager.models import Role
from usermanager.schemas.auth import (
    AuthResponse,
    CheckAuthResponse,
    Identity,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
)
from usermanager.schemas.user import UserPublic

logger = logging.getLogger(__name__)
router = APIRouter()

INVALID_CREDENTIALS = "Invalid credentials"


def set_auth_cookie(response: Response, identity: Identity) -> None:
    """Issue a token for identity and store it in the auth cookie (same lifetime as the token)."""
    response.set_cookie(
        AUTH_COOKIE_NAME,
        create_access_token(identity),
        max_age=settings.JWT_EXPIRATION,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
        path="/",
    )


@router.post("/register", response_model=AuthResponse)
def register(
    response: Response,
    body: RegisterRequest,
    store: Store,
) -> AuthResponse:
    """Create a user with role 'user' and start a session for it."""
    if store.find_by_username(body.username) is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username already exists")
    if store.find_by_email(body.email) is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")

    user = store.create(
        username=body.username,
        email=body.email,
        password_hash=hash_password(body.password),
        role=Role.USER,
    )
    if user is None:
        # lost a race on the unique constraints, or the database failed
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create user",
        )

    identity = Identity(id=user.id, username=user.username, role=user.role)
    set_auth_cookie(response, identity)
    logger.info("Registered user id=%s", user.id)
    return AuthResponse(user=identity)


@router.post("/login", response_model=AuthResponse)
def login(
    response: Response,
    body: LoginRequest,
    store: Store,
) -> AuthResponse:
    """
    Verify username and password and start a session.
    Unknown user and wrong password give the same 400 so usernames cannot be probed.
    """
    user = store.find_by_username(body.username)
    if user is None:
        # spend the same bcrypt work as a wrong password
        verify_against_dummy_hash(body.password)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_CREDENTIALS)
    if not verify_password(body.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_CREDENTIALS)

    identity = Identity(id=user.id, username=user.username, role=user.role)
    set_auth_cookie(response, identity)
    return AuthResponse(user=identity)


@router.get("/me", response_model=UserPublic)
def me(current_user: CurrentUser, store: Store) -> UserPublic:
    """Stored record of the authenticated user."""
    user = store.find_by_id(current_user.id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.get("/check-auth", response_model=CheckAuthResponse)
def check_auth(current_user: CurrentUser) -> CheckAuthResponse:
    return CheckAuthResponse(is_authenticated=True, user=current_user)


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response) -> MessageResponse:
    """Clear the auth cookie. Succeeds with or without a session."""
    response.delete_cookie(
        AUTH_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )
    return MessageResponse(message="Logged out successfully")
