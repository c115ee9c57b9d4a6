"""Admin read side of the activity log."""

from datetime import datetime, timedelta
from typing import Optional

import logfire

from discuss.domain.error import ForbiddenError
from discuss.domain.model import ActivityLogEntry, ThreadTotals
from discuss.domain.model.common import utc_now
from discuss.domain.repository import ActivityRepository, ThreadRepository
from discuss.domain.value import ActivityAction, Actor, Role, UserId
from discuss.domain.value.common import ValueObject

from .base import Service

# Window for the dashboard's recent activity breakdown
RECENT_ACTIVITY_WINDOW = timedelta(hours=24)


class ActivityPage(ValueObject):
    """One page of activity log entries."""

    entries: list[ActivityLogEntry]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.total else 0


class DashboardStats(ValueObject):
    """Forum totals plus recent activity grouped by action."""

    threads: ThreadTotals
    recent_activity: dict[ActivityAction, int]
    since: datetime


class AuditService(Service):
    """Lets admins browse the activity log and read dashboard stats."""

    def __init__(
        self,
        activity_repository: ActivityRepository,
        thread_repository: ThreadRepository,
    ) -> None:
        """Initialize audit service.

        Args:
            activity_repository: Activity log store
            thread_repository: Metadata store, for thread totals
        """
        self.activity_repository = activity_repository
        self.thread_repository = thread_repository

    @staticmethod
    def _require_admin(actor: Actor) -> None:
        if actor.role != Role.ADMIN:
            raise ForbiddenError("Only admins can view the activity log")

    async def list_activity(
        self,
        actor: Actor,
        actor_id: Optional[UserId] = None,
        action: Optional[ActivityAction] = None,
        page: int = 1,
        limit: int = 20,
    ) -> ActivityPage:
        """List activity entries, newest first.

        Args:
            actor: Requesting admin
            actor_id: Only entries by this user
            action: Only entries with this action
            page: 1-based page number
            limit: Page size

        Returns:
            Page of entries with the total count

        Raises:
            ForbiddenError: If the actor is not an admin
        """
        with logfire.span(
            "audit_service.list_activity",
            actor_id=str(actor_id) if actor_id else None,
            action=action.value if action else None,
            page=page,
            limit=limit,
        ):
            self._require_admin(actor)

            entries = await self.activity_repository.find(
                actor_id=actor_id,
                action=action,
                limit=limit,
                offset=(page - 1) * limit,
            )
            total = await self.activity_repository.count(
                actor_id=actor_id, action=action
            )
            return ActivityPage(entries=entries, total=total, page=page, limit=limit)

    async def dashboard_stats(
        self, actor: Actor, now: Optional[datetime] = None
    ) -> DashboardStats:
        """Thread totals and the last 24 hours of activity by action.

        Raises:
            ForbiddenError: If the actor is not an admin
        """
        with logfire.span("audit_service.dashboard_stats"):
            self._require_admin(actor)

            since = (now or utc_now()) - RECENT_ACTIVITY_WINDOW
            threads = await self.thread_repository.totals()
            recent = await self.activity_repository.count_by_action(since)

            logfire.info(
                "Dashboard stats",
                threads=threads.total,
                replies=threads.total_replies,
                recent_actions=sum(recent.values()),
            )
            return DashboardStats(threads=threads, recent_activity=recent, since=since)
