"""First-run creation of the admin and test accounts. Safe to run on every start."""

import logging

from sqlalchemy.orm import Session

from usermanager.core.config import Settings, settings
from usermanager.core.database import SessionLocal, engine
from usermanager.core.security import hash_password
from usermanager.models import Base, Role
from usermanager.services.user_store import UserStore

logger = logging.getLogger(__name__)


def seed_default_users(session: Session, config: Settings) -> list[str]:
    """
    Create the configured admin and test accounts if their usernames are absent.

    Existing accounts are left untouched. Returns the usernames created.
    """
    if not config.SEED_DEFAULT_USERS:
        logger.info("Seeding is disabled (SEED_DEFAULT_USERS=false); skipping.")
        return []

    store = UserStore(session)
    accounts = [
        (config.ADMIN_USERNAME, config.ADMIN_EMAIL, config.ADMIN_DEFAULT_PASSWORD, Role.ADMIN),
        (config.TEST_USERNAME, config.TEST_EMAIL, config.USER_DEFAULT_PASSWORD, Role.USER),
    ]
    created: list[str] = []
    for username, email, password, role in accounts:
        if store.find_by_username(username) is not None:
            continue
        user = store.create(
            username=username,
            email=email,
            password_hash=hash_password(password.get_secret_value()),
            role=role,
        )
        if user is None:
            logger.error("Could not seed %s account '%s'", role.value, username)
            continue
        created.append(username)
        logger.warning(
            "Default %s account '%s' created; change its password immediately.",
            role.value,
            username,
        )
    return created


def init_db() -> None:
    """Startup step: create missing tables (if enabled) and seed default accounts."""
    if settings.DB_AUTO_CREATE:
        Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        created = seed_default_users(db, settings)
        logger.info("Database ready; seeded accounts: %s", ", ".join(created) or "none")
    finally:
        db.close()
