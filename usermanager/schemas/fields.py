"""Field checks shared by request schemas; each raises a single readable message."""

from email_validator import EmailNotValidError, validate_email
from pydantic_core import PydanticCustomError

from usermanager.models.user import Role

USERNAME_MAX_LEN = 50
EMAIL_MAX_LEN = 100
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128


def _fail(message: str) -> PydanticCustomError:
    return PydanticCustomError("value_error", message)


def check_username(value: str | None, *, required: bool) -> str | None:
    value = value.strip() if value is not None else ""
    if not value:
        if required:
            raise _fail("Username is required")
        # missing or blank optional username: leave unchanged
        return None
    if len(value) > USERNAME_MAX_LEN:
        raise _fail(f"Username must be at most {USERNAME_MAX_LEN} characters")
    return value


def check_email(value: str | None, *, required: bool) -> str | None:
    if value is None:
        if required:
            raise _fail("Please include a valid email")
        return None
    value = value.strip()
    if len(value) > EMAIL_MAX_LEN:
        raise _fail("Please include a valid email")
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise _fail("Please include a valid email")
    return value


def check_password(value: str | None, *, required: bool) -> str | None:
    if value is None:
        if required:
            raise _fail(f"Password must be at least {PASSWORD_MIN_LEN} characters")
        return None
    if len(value) < PASSWORD_MIN_LEN:
        raise _fail(f"Password must be at least {PASSWORD_MIN_LEN} characters")
    if len(value) > PASSWORD_MAX_LEN:
        raise _fail(f"Password must be at most {PASSWORD_MAX_LEN} characters")
    return value


def check_role(value: str | Role | None, *, required: bool) -> Role | None:
    if value is None or value == "":
        if required:
            raise _fail("Role is required")
        return None
    try:
        return Role(value)
    except ValueError:
        raise _fail("Invalid role")


def require_present(value: str | None, message: str) -> str:
    if value is None:
        raise _fail(message)
    return value
