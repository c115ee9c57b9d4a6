"""Thread metadata aggregate.

Thread metadata lives in the relational store and is what listings sort and
filter on. The thread's text lives in a separate content document (see
discuss.domain.model.content), created together with this row by the
thread creation saga.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from discuss.domain.model.common import DomainModel, utc_now
from discuss.domain.value import CategoryId, Slug, ThreadId, UserId


class NewThread(DomainModel):
    """Thread row as submitted for insertion.

    The store assigns the id and timestamps on insert.
    """

    title: str = Field(min_length=1, max_length=500)
    slug: Slug
    category_id: CategoryId
    author_id: UserId


class ThreadMetadata(DomainModel):
    """Thread metadata row.

    reply_count, last_reply_at and last_reply_by are derived from the
    content document's comments and may lag behind it. Never count
    comments from them.
    """

    id: ThreadId
    slug: Slug
    title: str = Field(min_length=1, max_length=500)
    category_id: CategoryId
    author_id: UserId
    is_pinned: bool = False
    is_locked: bool = False
    view_count: int = Field(default=0, ge=0)
    reply_count: int = Field(default=0, ge=0)
    last_reply_at: Optional[datetime] = None
    last_reply_by: Optional[UserId] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class ThreadTotals(DomainModel):
    """Forum-wide thread counters for the admin dashboard."""

    total: int = 0
    total_replies: int = 0
