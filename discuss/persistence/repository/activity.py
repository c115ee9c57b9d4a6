"""MongoDB (beanie) implementation of Activity repository."""

from datetime import datetime
from typing import Any, Dict, List, Optional

import logfire

from discuss.domain.model import ActivityLogEntry
from discuss.domain.repository.activity import ActivityRepository
from discuss.domain.value import ActivityAction, UserId
from discuss.persistence.documents import ActivityLogDocument
from discuss.persistence.error import content_errors
from discuss.persistence.mappers import document_to_entry, entry_to_document


def _filter(
    actor_id: Optional[UserId], action: Optional[ActivityAction]
) -> Dict[str, Any]:
    query: Dict[str, Any] = {}
    if actor_id is not None:
        query["actor_id"] = actor_id
    if action is not None:
        query["action"] = action.value
    return query


class MongoActivityRepository(ActivityRepository):
    """Activity log stored in the document store, expired by TTL index."""

    async def insert(self, entry: ActivityLogEntry) -> None:
        with content_errors("Activity log entry"):
            await entry_to_document(entry).insert()

    async def find_by_actor(
        self, actor_id: UserId, limit: int = 50
    ) -> List[ActivityLogEntry]:
        return await self.find(actor_id=actor_id, limit=limit)

    async def find(
        self,
        actor_id: Optional[UserId] = None,
        action: Optional[ActivityAction] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[ActivityLogEntry]:
        """Find entries, newest first."""
        with (
            logfire.span(
                "activity_repository.find",
                actor_id=str(actor_id) if actor_id else None,
                action=action.value if action else None,
                limit=limit,
                offset=offset,
            ),
            content_errors("Activity log entry"),
        ):
            docs = (
                await ActivityLogDocument.find(_filter(actor_id, action))
                .sort("-created_at")
                .skip(offset)
                .limit(limit)
                .to_list()
            )
            return [document_to_entry(d) for d in docs]

    async def count(
        self,
        actor_id: Optional[UserId] = None,
        action: Optional[ActivityAction] = None,
    ) -> int:
        with content_errors("Activity log entry"):
            return await ActivityLogDocument.find(_filter(actor_id, action)).count()

    async def count_by_action(self, since: datetime) -> Dict[ActivityAction, int]:
        """Group entries created since the given time by action."""
        with (
            logfire.span("activity_repository.count_by_action"),
            content_errors("Activity log entry"),
        ):
            rows = await ActivityLogDocument.aggregate(
                [
                    {"$match": {"created_at": {"$gte": since}}},
                    {"$group": {"_id": "$action", "count": {"$sum": 1}}},
                ]
            ).to_list()
            return {ActivityAction(row["_id"]): row["count"] for row in rows}
