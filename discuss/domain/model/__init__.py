"""Domain model entities for discussions."""

from discuss.domain.model.activity import ActivityLogEntry
from discuss.domain.model.category import Category
from discuss.domain.model.content import Comment, OriginalPost, ThreadContent
from discuss.domain.model.thread import NewThread, ThreadMetadata, ThreadTotals

__all__ = [
    "ActivityLogEntry",
    "Category",
    "Comment",
    "NewThread",
    "OriginalPost",
    "ThreadContent",
    "ThreadMetadata",
    "ThreadTotals",
]
