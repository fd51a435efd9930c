"""ORM model for application users (auth and RBAC)."""

import enum

from sqlalchemy import CheckConstraint, Column, Integer, String

from usermanager.models.base import Base, TimestampMixin


class Role(str, enum.Enum):
    """Closed set of authorization roles."""

    ADMIN = "admin"
    USER = "user"


class User(TimestampMixin, Base):
    """
    User account for JWT authentication and role-based access control.

    password holds a bcrypt hash, never plain text.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('admin', 'user')", name="ck_users_role"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    email = Column(String(100), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    role = Column(String(16), nullable=False, default=Role.USER.value, server_default=Role.USER.value)
