"""Admin use cases."""

from .get_activity_log import (
    ActivityItem,
    GetActivityLogRequest,
    GetActivityLogResponse,
    GetActivityLogUseCase,
)
from .get_dashboard_stats import (
    GetDashboardStatsRequest,
    GetDashboardStatsResponse,
    GetDashboardStatsUseCase,
)

__all__ = [
    "ActivityItem",
    "GetActivityLogRequest",
    "GetActivityLogResponse",
    "GetActivityLogUseCase",
    "GetDashboardStatsRequest",
    "GetDashboardStatsResponse",
    "GetDashboardStatsUseCase",
]
