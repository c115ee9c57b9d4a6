"""Get activity log use case."""

from datetime import datetime
from typing import Any
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from discuss.domain.model import ActivityLogEntry
from discuss.domain.service import AuditService
from discuss.domain.value import ActivityAction, Actor, UserId


class GetActivityLogRequest(BaseModel):
    """Get activity log request."""

    actor: Actor  # From the authenticated user
    user_id: UUID | None = None  # Only entries by this user
    action: ActivityAction | None = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)


class ActivityItem(BaseModel):
    """Activity log entry in responses."""

    actor_id: str | None
    action: ActivityAction
    resource: str | None
    metadata: dict[str, Any]
    ip_address: str | None
    user_agent: str | None
    created_at: datetime

    @classmethod
    def from_model(cls, entry: ActivityLogEntry) -> "ActivityItem":
        return cls(
            actor_id=str(entry.actor_id) if entry.actor_id else None,
            action=entry.action,
            resource=entry.resource,
            metadata=entry.metadata,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            created_at=entry.created_at,
        )


class GetActivityLogResponse(BaseModel):
    """Get activity log response."""

    entries: list[ActivityItem]
    total: int
    page: int
    limit: int
    pages: int


class GetActivityLogUseCase:
    """Use case for browsing the activity log (admins only)."""

    def __init__(self, audit_service: AuditService) -> None:
        """Initialize get activity log use case.

        Args:
            audit_service: Activity log read service
        """
        self.audit_service = audit_service

    async def execute(self, request: GetActivityLogRequest) -> GetActivityLogResponse:
        """Execute get activity log flow.

        Args:
            request: Filters and pagination

        Returns:
            One page of entries, newest first
        """
        with logfire.span(
            "get_activity_log.execute", page=request.page, limit=request.limit
        ):
            page = await self.audit_service.list_activity(
                request.actor,
                actor_id=UserId(request.user_id) if request.user_id else None,
                action=request.action,
                page=request.page,
                limit=request.limit,
            )
            return GetActivityLogResponse(
                entries=[ActivityItem.from_model(e) for e in page.entries],
                total=page.total,
                page=page.page,
                limit=page.limit,
                pages=page.pages,
            )
