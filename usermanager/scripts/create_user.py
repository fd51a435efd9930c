"""
Create a user (e.g. an extra admin) without going through the API. Run from project root:
  python -m usermanager.scripts.create_user USERNAME EMAIL PASSWORD [role]
Example:
  python -m usermanager.scripts.create_user alice alice@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from usermanager.core.database import SessionLocal
from usermanager.core.security import hash_password
from usermanager.models import Role
from usermanager.schemas.user import UserCreateRequest
from usermanager.services.user_store import UserStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a user account.")
    parser.add_argument("username", help="Username (1-50 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (6-128 chars)")
    parser.add_argument("role", nargs="?", default=Role.USER.value, choices=[r.value for r in Role])
    args = parser.parse_args(argv)

    try:
        body = UserCreateRequest(
            username=args.username,
            email=args.email,
            password=args.password,
            role=args.role,
        )
    except ValidationError as e:
        for err in e.errors():
            print(err["msg"], file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        store = UserStore(db)
        if store.find_by_username(body.username) is not None:
            print(f"User '{body.username}' already exists.", file=sys.stderr)
            return 1
        if store.find_by_email(body.email) is not None:
            print(f"Email '{body.email}' already exists.", file=sys.stderr)
            return 1
        user = store.create(
            username=body.username,
            email=body.email,
            password_hash=hash_password(body.password),
            role=body.role,
        )
        if user is None:
            logger.error("Failed to create user '%s'", body.username)
            return 1
        print(f"Created user '{user.username}' (id={user.id}) with role '{user.role.value}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
