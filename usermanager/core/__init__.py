"""Core app configuration, database and security."""

from usermanager.core.config import get_settings, settings
from usermanager.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
