"""Dashboard and activity figures.

There is no audit log, so activity numbers come from a provider interface.
PlaceholderStatsProvider returns fixed figures and timestamps relative to now;
swap in a real provider through the get_stats_provider dependency.
"""

from datetime import UTC, datetime, timedelta
from typing import Protocol

from usermanager.schemas.dashboard import RecentActivity
from usermanager.schemas.user import ActivityItem


class StatsProvider(Protocol):
    def active_users(self) -> int: ...

    def new_users(self) -> int: ...

    def recent_activity(self) -> list[RecentActivity]: ...

    def user_activity(self, user_id: int) -> list[ActivityItem]: ...


class PlaceholderStatsProvider:
    """Fixed placeholder figures; not derived from stored data."""

    ACTIVE_USERS = 10
    NEW_USERS = 0

    def __init__(self, now: datetime | None = None) -> None:
        self._now = now

    def _current_time(self) -> datetime:
        return self._now or datetime.now(UTC)

    def active_users(self) -> int:
        return self.ACTIVE_USERS

    def new_users(self) -> int:
        return self.NEW_USERS

    def recent_activity(self) -> list[RecentActivity]:
        now = self._current_time()
        return [
            RecentActivity(action="User login", timestamp=now - timedelta(minutes=2)),
            RecentActivity(action="Profile updated", timestamp=now - timedelta(hours=1)),
            RecentActivity(action="New user registered", timestamp=now - timedelta(days=1)),
        ]

    def user_activity(self, user_id: int) -> list[ActivityItem]:
        now = self._current_time()
        return [
            ActivityItem(
                type="Login",
                description="Signed in to the application",
                timestamp=now - timedelta(minutes=2),
            ),
            ActivityItem(
                type="Profile",
                description="Viewed profile settings",
                timestamp=now - timedelta(hours=1),
            ),
        ]


def get_stats_provider() -> StatsProvider:
    """Dependency returning the active stats provider."""
    return PlaceholderStatsProvider()
