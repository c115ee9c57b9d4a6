"""Get dashboard stats use case."""

from datetime import datetime

from pydantic import BaseModel

from discuss.domain.service import AuditService
from discuss.domain.value import Actor


class GetDashboardStatsRequest(BaseModel):
    """Get dashboard stats request."""

    actor: Actor


class ThreadStats(BaseModel):
    total: int
    total_replies: int


class GetDashboardStatsResponse(BaseModel):
    """Get dashboard stats response.

    activity_last_24h maps each action seen in the window to its count.
    """

    threads: ThreadStats
    activity_last_24h: dict[str, int]
    since: datetime


class GetDashboardStatsUseCase:
    """Use case for the admin dashboard counters."""

    def __init__(self, audit_service: AuditService) -> None:
        self.audit_service = audit_service

    async def execute(
        self, request: GetDashboardStatsRequest
    ) -> GetDashboardStatsResponse:
        stats = await self.audit_service.dashboard_stats(request.actor)
        return GetDashboardStatsResponse(
            threads=ThreadStats(
                total=stats.threads.total,
                total_replies=stats.threads.total_replies,
            ),
            activity_last_24h={
                action.value: count for action, count in stats.recent_activity.items()
            },
            since=stats.since,
        )
