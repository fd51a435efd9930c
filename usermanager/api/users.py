"""User management: self-service profile routes and admin-only CRUD."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from usermanager.api.deps import AdminUser, CurrentUser, Store
from usermanager.core.security import hash_password, verify_password
from usermanager.models import Role
from usermanager.schemas.auth import MessageResponse
from usermanager.schemas.user import (
    ActivityItem,
    ChangePasswordRequest,
    ProfileUpdateRequest,
    UserCreateRequest,
    UserPublic,
    UserUpdateRequest,
)
from usermanager.services.stats import StatsProvider, get_stats_provider
from usermanager.services.user_store import UserStore

logger = logging.getLogger(__name__)
router = APIRouter()


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")


def _server_error(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


def _ensure_unique(
    store: UserStore,
    *,
    username: str | None,
    email: str | None,
    exclude_id: int | None = None,
) -> None:
    """Raise 400 if username or email already belongs to another user."""
    if username:
        existing = store.find_by_username(username)
        if existing is not None and existing.id != exclude_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username already exists")
    if email:
        existing = store.find_by_email(email)
        if existing is not None and existing.id != exclude_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")


def _apply_profile_fields(store: UserStore, user: UserPublic, body: ProfileUpdateRequest) -> UserPublic:
    """Write username/email/password through the narrow update path (never the role)."""
    if not (body.username or body.email or body.password):
        return user
    _ensure_unique(store, username=body.username, email=body.email, exclude_id=user.id)
    updated = store.update(
        user.id,
        username=body.username,
        email=body.email,
        password_hash=hash_password(body.password) if body.password else None,
    )
    if updated is None:
        raise _server_error("Failed to update user")
    return updated


# ---------- Self-service (any authenticated user) ----------


@router.get("/me", response_model=UserPublic)
def get_profile(current_user: CurrentUser, store: Store) -> UserPublic:
    user = store.find_by_id(current_user.id)
    if user is None:
        raise _not_found()
    return user


@router.put("/me", response_model=UserPublic)
def update_profile(body: ProfileUpdateRequest, current_user: CurrentUser, store: Store) -> UserPublic:
    """Update own username, email or password. Role changes are not possible here."""
    user = store.find_by_id(current_user.id)
    if user is None:
        raise _not_found()
    return _apply_profile_fields(store, user, body)


@router.post("/change-password", response_model=MessageResponse)
def change_password(body: ChangePasswordRequest, current_user: CurrentUser, store: Store) -> MessageResponse:
    """Replace own password after re-checking the current one."""
    credentials = store.find_by_username(current_user.username)
    if credentials is None or credentials.id != current_user.id:
        raise _not_found()
    if not verify_password(body.current_password, credentials.password_hash):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect",
        )
    if store.update(current_user.id, password_hash=hash_password(body.new_password)) is None:
        raise _server_error("Failed to update password")
    return MessageResponse(message="Password changed successfully")


@router.get("/activity", response_model=list[ActivityItem])
def get_activity(
    current_user: CurrentUser,
    stats: StatsProvider = Depends(get_stats_provider),
) -> list[ActivityItem]:
    """Placeholder activity feed; there is no persisted audit log."""
    return stats.user_activity(current_user.id)


# ---------- Admin CRUD ----------


@router.get("", response_model=list[UserPublic])
def list_users(_admin: AdminUser, store: Store) -> list[UserPublic]:
    return store.get_all()


@router.get("/{user_id}", response_model=UserPublic)
def get_user(user_id: int, _admin: AdminUser, store: Store) -> UserPublic:
    user = store.find_by_id(user_id)
    if user is None:
        raise _not_found()
    return user


@router.post("", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def create_user(body: UserCreateRequest, admin: AdminUser, store: Store) -> UserPublic:
    """Create a user with an explicit role."""
    _ensure_unique(store, username=body.username, email=body.email)
    user = store.create(
        username=body.username,
        email=body.email,
        password_hash=hash_password(body.password),
        role=body.role,
    )
    if user is None:
        raise _server_error("Failed to create user")
    logger.info("Admin id=%s created user id=%s role=%s", admin.id, user.id, user.role.value)
    return user


@router.put("/{user_id}", response_model=UserPublic)
def update_user(user_id: int, body: UserUpdateRequest, admin: AdminUser, store: Store) -> UserPublic:
    """
    Update any of username, email, password and role. Generic fields go through
    the narrow update; the role goes through the separate privileged update.
    """
    user = store.find_by_id(user_id)
    if user is None:
        raise _not_found()
    if user.id == admin.id and body.role is not None and body.role != Role.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Admin cannot remove their own admin status",
        )

    user = _apply_profile_fields(store, user, body)

    if body.role is not None and body.role != user.role:
        updated = store.update_role(user_id, body.role)
        if updated is None:
            raise _server_error("Failed to update user role")
        logger.info("Admin id=%s changed role of user id=%s to %s", admin.id, user_id, body.role.value)
        return updated
    return user


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(user_id: int, admin: AdminUser, store: Store) -> MessageResponse:
    user = store.find_by_id(user_id)
    if user is None:
        raise _not_found()
    if user.id == admin.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Admin cannot delete themselves",
        )
    if not store.delete(user_id):
        raise _server_error("Failed to delete user")
    logger.info("Admin id=%s deleted user id=%s", admin.id, user_id)
    return MessageResponse(message="User deleted successfully")
