"""Dashboard summary: stored user count plus placeholder activity figures."""

from fastapi import APIRouter, Depends

from usermanager.api.deps import Store
from usermanager.schemas.dashboard import DashboardResponse, DashboardStats
from usermanager.services.stats import StatsProvider, get_stats_provider

router = APIRouter()


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    store: Store,
    stats: StatsProvider = Depends(get_stats_provider),
) -> DashboardResponse:
    """
    Public, no session required. Only stats.users comes from the
    database; activeUsers, newUsers and recentActivity come from the stats provider.
    """
    return DashboardResponse(
        stats=DashboardStats(
            active_users=stats.active_users(),
            new_users=stats.new_users(),
            users=store.count(),
        ),
        recent_activity=stats.recent_activity(),
    )
