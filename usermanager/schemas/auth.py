"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from usermanager.models.user import Role
from usermanager.schemas.fields import check_email, check_password, check_username, require_present


class Identity(BaseModel):
    """Authenticated identity decoded from a session token; immutable once built."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    username: str
    role: Role


class RegisterRequest(BaseModel):
    """Self-service registration; the role is always user."""

    username: str | None = Field(default=None, validate_default=True)
    email: str | None = Field(default=None, validate_default=True)
    password: str | None = Field(default=None, validate_default=True)

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


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str | None = Field(default=None, validate_default=True)
    password: str | None = Field(default=None, validate_default=True)

    @field_validator("username")
    @classmethod
    def require_username(cls, v: str | None) -> str:
        return require_present(v, "Username is required").strip()

    @field_validator("password")
    @classmethod
    def require_password(cls, v: str | None) -> str:
        return require_present(v, "Password is required")


class AuthResponse(BaseModel):
    """Returned by register and login; the token itself travels only in the cookie."""

    user: Identity


class CheckAuthResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_authenticated: bool = Field(default=True, serialization_alias="isAuthenticated")
    user: Identity


class MessageResponse(BaseModel):
    message: str


class CsrfTokenResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    csrf_token: str = Field(serialization_alias="csrfToken")
