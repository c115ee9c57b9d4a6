"""Fire-and-forget activity (audit) recorder."""

import asyncio
from typing import Any, Optional

import logfire

from discuss.domain.model import ActivityLogEntry
from discuss.domain.repository import ActivityRepository
from discuss.domain.value import ActivityAction, RequestOrigin, UserId

from .base import Service


class ActivityRecorder(Service):
    """Writes activity log entries without making callers wait.

    The calling operation never observes an audit failure: writes run as
    background tasks whose errors are logged and dropped. Strong references
    to the tasks are held until they finish so they are not garbage
    collected mid-flight.
    """

    def __init__(self, activity_repository: ActivityRepository) -> None:
        """Initialize recorder.

        Args:
            activity_repository: Store for activity entries
        """
        self.activity_repository = activity_repository
        self._pending: set[asyncio.Task[None]] = set()

    def record(
        self,
        actor_id: Optional[UserId],
        action: ActivityAction | str,
        resource: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
        origin: Optional[RequestOrigin] = None,
    ) -> None:
        """Schedule an activity log write and return immediately.

        Args:
            actor_id: Who performed the action
            action: One of ActivityAction
            resource: Resource identifier, e.g. "thread:<id>"
            metadata: Free-form details
            origin: Client IP and user agent

        Raises:
            ValueError: If action is not an ActivityAction (a programming error)
        """
        action = ActivityAction(action)
        entry = ActivityLogEntry(
            actor_id=actor_id,
            action=action,
            resource=resource,
            metadata=metadata or {},
            ip_address=origin.ip_address if origin else None,
            user_agent=origin.user_agent if origin else None,
        )

        task = asyncio.create_task(self._write(entry))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _write(self, entry: ActivityLogEntry) -> None:
        try:
            await self.activity_repository.insert(entry)
        except Exception as e:
            # Audit is best-effort; the audited operation has already succeeded
            logfire.error(
                "Activity log write failed",
                action=entry.action.value,
                resource=entry.resource,
                error=str(e),
            )

    @property
    def pending(self) -> int:
        """Number of writes not yet finished."""
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for every scheduled write to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending))
