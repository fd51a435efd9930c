"""Schemas for user records and the user management endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from usermanager.models.user import Role
from usermanager.schemas.fields import (
    check_email,
    check_password,
    check_role,
    check_username,
    require_present,
)


class UserPublic(BaseModel):
    """User as exposed to clients (no password hash)."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    username: str
    email: str
    role: Role
    created_at: datetime | None = Field(default=None, serialization_alias="createdAt")
    updated_at: datetime | None = Field(default=None, serialization_alias="updatedAt")


class UserCredentials(UserPublic):
    """User plus stored hash; only returned by the credential lookups, never serialized."""

    password_hash: str = Field(validation_alias="password")


class UserCreateRequest(BaseModel):
    """Admin creation; role is explicit."""

    username: str | None = Field(default=None, validate_default=True)
    email: str | None = Field(default=None, validate_default=True)
    password: str | None = Field(default=None, validate_default=True)
    role: Role | None = Field(default=None, validate_default=True)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str | None) -> str | None:
        return check_username(v, required=True)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        return check_email(v, required=True)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str | None) -> str | None:
        return check_password(v, required=True)

    @field_validator("role", mode="before")
    @classmethod
    def validate_role(cls, v: object) -> Role | None:
        return check_role(v, required=True)


class ProfileUpdateRequest(BaseModel):
    """Self-service update; every field optional, role not accepted."""

    username: str | None = None
    email: str | None = None
    password: str | None = None

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str | None) -> str | None:
        return check_username(v, required=False)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        return check_email(v, required=False)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str | None) -> str | None:
        return check_password(v, required=False)


class UserUpdateRequest(ProfileUpdateRequest):
    """Admin update; adds the privileged role change."""

    role: Role | None = None

    @field_validator("role", mode="before")
    @classmethod
    def validate_role(cls, v: object) -> Role | None:
        return check_role(v, required=False)


class ChangePasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_password: str | None = Field(
        default=None, alias="currentPassword", validate_default=True
    )
    new_password: str | None = Field(default=None, alias="newPassword", validate_default=True)

    @field_validator("current_password")
    @classmethod
    def require_current_password(cls, v: str | None) -> str:
        return require_present(v, "Current password is required")

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, v: str | None) -> str | None:
        return check_password(v, required=True)


class ActivityItem(BaseModel):
    """One entry of the (placeholder) per-user activity feed."""

    type: str
    description: str
    timestamp: datetime
