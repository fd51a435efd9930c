"""Response schemas for the dashboard endpoint."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class DashboardStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    active_users: int = Field(serialization_alias="activeUsers")
    new_users: int = Field(serialization_alias="newUsers")
    users: int


class RecentActivity(BaseModel):
    action: str
    timestamp: datetime


class DashboardResponse(BaseModel):
    """Body of GET /api/dashboard. Only stats.users reflects stored data."""

    model_config = ConfigDict(populate_by_name=True)

    stats: DashboardStats
    recent_activity: list[RecentActivity] = Field(serialization_alias="recentActivity")
