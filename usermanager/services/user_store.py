"""Persistence for the users table.

Every operation converts database failures into a neutral return value
(None, [], 0 or False) after rolling back and logging, so callers never see
SQLAlchemy exceptions. Uniqueness is enforced by the table constraints; route
handlers pre-check it to return a clean conflict message.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from usermanager.models import Role, User
from usermanager.schemas.user import UserCredentials, UserPublic

logger = logging.getLogger(__name__)

# users.id is a 32-bit INTEGER; ids outside this range cannot match a row
MAX_USER_ID = 2**31 - 1


def _storable_id(user_id: int) -> bool:
    return 1 <= user_id <= MAX_USER_ID


class UserStore:
    """CRUD over users bound to one request-scoped session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def _fail(self, message: str, *args: object) -> None:
        self.session.rollback()
        logger.error(message, *args, exc_info=True)

    def _public(self, user_id: int) -> UserPublic | None:
        user = self.session.get(User, user_id, populate_existing=True)
        return UserPublic.model_validate(user) if user is not None else None

    def get_all(self) -> list[UserPublic]:
        try:
            users = self.session.scalars(select(User).order_by(User.id)).all()
            return [UserPublic.model_validate(u) for u in users]
        except SQLAlchemyError:
            self._fail("Error getting all users")
            return []

    def count(self) -> int:
        try:
            return self.session.scalar(select(func.count(User.id))) or 0
        except SQLAlchemyError:
            self._fail("Error counting users")
            return 0

    def find_by_id(self, user_id: int) -> UserPublic | None:
        if not _storable_id(user_id):
            return None
        try:
            return self._public(user_id)
        except SQLAlchemyError:
            self._fail("Error finding user with ID %s", user_id)
            return None

    def find_by_username(self, username: str) -> UserCredentials | None:
        """Lookup for authentication; includes the password hash."""
        try:
            user = self.session.scalars(select(User).where(User.username == username)).first()
            return UserCredentials.model_validate(user) if user is not None else None
        except SQLAlchemyError:
            self._fail("Error finding user with username %s", username)
            return None

    def find_by_email(self, email: str) -> UserCredentials | None:
        """Lookup for uniqueness checks; includes the password hash."""
        try:
            user = self.session.scalars(select(User).where(User.email == email)).first()
            return UserCredentials.model_validate(user) if user is not None else None
        except SQLAlchemyError:
            self._fail("Error finding user with email %s", email)
            return None

    def create(
        self,
        *,
        username: str,
        email: str,
        password_hash: str,
        role: Role = Role.USER,
    ) -> UserPublic | None:
        """Insert a user; returns None on constraint violation or any other failure."""
        user = User(username=username, email=email, password=password_hash, role=Role(role).value)
        try:
            self.session.add(user)
            self.session.commit()
            return self._public(user.id)
        except SQLAlchemyError:
            self._fail("Error creating user %s", username)
            return None

    def update(
        self,
        user_id: int,
        *,
        username: str | None = None,
        email: str | None = None,
        password_hash: str | None = None,
    ) -> UserPublic | None:
        """
        Change only the supplied fields. Role is deliberately not accepted here;
        see update_role. Returns None when nothing was supplied or no row matched.
        """
        values: dict[str, str] = {}
        if username:
            values["username"] = username
        if email:
            values["email"] = email
        if password_hash:
            values["password"] = password_hash
        if not values:
            return None
        return self._apply(user_id, values, "Error updating user with ID %s")

    def update_role(self, user_id: int, role: Role) -> UserPublic | None:
        """Privileged role change; only reachable from admin-authorized handlers."""
        return self._apply(
            user_id,
            {"role": Role(role).value},
            "Error updating role for user with ID %s",
        )

    def _apply(self, user_id: int, values: dict[str, str], error_message: str) -> UserPublic | None:
        if not _storable_id(user_id):
            return None
        try:
            user = self.session.get(User, user_id)
            if user is None:
                return None
            for key, value in values.items():
                setattr(user, key, value)
            self.session.commit()
            return self._public(user_id)
        except SQLAlchemyError:
            self._fail(error_message, user_id)
            return None

    def delete(self, user_id: int) -> bool:
        if not _storable_id(user_id):
            return False
        try:
            user = self.session.get(User, user_id)
            if user is None:
                return False
            self.session.delete(user)
            self.session.commit()
            return True
        except SQLAlchemyError:
            self._fail("Error deleting user with ID %s", user_id)
            return False
