"""Pydantic request/response schemas."""

from usermanager.schemas.auth import (
    AuthResponse,
    CheckAuthResponse,
    CsrfTokenResponse,
    Identity,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
)
from usermanager.schemas.dashboard import DashboardResponse, DashboardStats, RecentActivity
from usermanager.schemas.health import HealthResponse
from usermanager.schemas.user import (
    ActivityItem,
    ChangePasswordRequest,
    ProfileUpdateRequest,
    UserCreateRequest,
    UserCredentials,
    UserPublic,
    UserUpdateRequest,
)

__all__ = [
    "ActivityItem",
    "AuthResponse",
    "ChangePasswordRequest",
    "CheckAuthResponse",
    "CsrfTokenResponse",
    "DashboardResponse",
    "DashboardStats",
    "HealthResponse",
    "Identity",
    "LoginRequest",
    "MessageResponse",
    "ProfileUpdateRequest",
    "RecentActivity",
    "RegisterRequest",
    "UserCreateRequest",
    "UserCredentials",
    "UserPublic",
    "UserUpdateRequest",
]
