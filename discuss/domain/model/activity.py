"""Activity log entry."""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from discuss.domain.model.common import DomainModel, utc_now
from discuss.domain.value import ActivityAction, UserId


class ActivityLogEntry(DomainModel):
    """Audit record of a mutating action.

    Entries are written fire-and-forget and expire through a TTL policy.
    """

    actor_id: Optional[UserId] = None
    action: ActivityAction
    resource: Optional[str] = None  # e.g. "thread:<id>:comment:<id>"
    metadata: dict[str, Any] = Field(default_factory=dict)
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
