"""SQLAlchemy ORM models."""

from usermanager.models.base import Base
from usermanager.models.user import Role, User

__all__ = ["Base", "Role", "User"]
