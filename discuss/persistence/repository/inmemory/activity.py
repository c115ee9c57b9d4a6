"""In-memory activity repository for testing."""

from collections import Counter
from datetime import datetime
from typing import Optional

from discuss.domain.model import ActivityLogEntry
from discuss.domain.repository.activity import ActivityRepository
from discuss.domain.value import ActivityAction, UserId


class InMemoryActivityRepository(ActivityRepository):
    """In-memory implementation of ActivityRepository for testing."""

    def __init__(self) -> None:
        self.entries: list[ActivityLogEntry] = []

    async def insert(self, entry: ActivityLogEntry) -> None:
        self.entries.append(entry)

    def _filtered(
        self, actor_id: Optional[UserId], action: Optional[ActivityAction]
    ) -> list[ActivityLogEntry]:
        entries = [
            e
            for e in self.entries
            if (actor_id is None or e.actor_id == actor_id)
            and (action is None or e.action == action)
        ]
        entries.sort(key=lambda e: e.created_at, reverse=True)
        return entries

    async def find_by_actor(
        self, actor_id: UserId, limit: int = 50
    ) -> list[ActivityLogEntry]:
        return self._filtered(actor_id, None)[:limit]

    async def find(
        self,
        actor_id: Optional[UserId] = None,
        action: Optional[ActivityAction] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[ActivityLogEntry]:
        return self._filtered(actor_id, action)[offset : offset + limit]

    async def count(
        self,
        actor_id: Optional[UserId] = None,
        action: Optional[ActivityAction] = None,
    ) -> int:
        return len(self._filtered(actor_id, action))

    async def count_by_action(self, since: datetime) -> dict[ActivityAction, int]:
        return dict(Counter(e.action for e in self.entries if e.created_at >= since))
