"""Activity log repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional

from discuss.domain.model.activity import ActivityLogEntry
from discuss.domain.value import ActivityAction, UserId


class ActivityRepository(ABC):
    """Append-only store of activity log entries."""

    @abstractmethod
    async def insert(self, entry: ActivityLogEntry) -> None:
        """Store one entry."""
        pass

    @abstractmethod
    async def find_by_actor(
        self, actor_id: UserId, limit: int = 50
    ) -> List[ActivityLogEntry]:
        """Most recent entries for an actor, newest first."""
        pass

    @abstractmethod
    async def find(
        self,
        actor_id: Optional[UserId] = None,
        action: Optional[ActivityAction] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[ActivityLogEntry]:
        """Find entries, newest first.

        Args:
            actor_id: Only entries by this actor (None for all)
            action: Only entries with this action (None for all)
            limit: Maximum number of entries to return
            offset: Number of entries to skip

        Returns:
            Matching entries
        """
        pass

    @abstractmethod
    async def count(
        self,
        actor_id: Optional[UserId] = None,
        action: Optional[ActivityAction] = None,
    ) -> int:
        """Count entries matching the given filters."""
        pass

    @abstractmethod
    async def count_by_action(self, since: datetime) -> Dict[ActivityAction, int]:
        """Number of entries per action created at or after since.

        Actions with no entries are left out.
        """
        pass
