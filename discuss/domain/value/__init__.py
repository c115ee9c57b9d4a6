"""Domain value objects for discussions."""

from discuss.domain.value.identifiers import (
    CategoryId,
    CommentId,
    ThreadId,
    UserId,
)
from discuss.domain.value.types import (
    ActivityAction,
    Actor,
    CategoryStatus,
    RequestOrigin,
    Role,
    Slug,
    TagName,
    ThreadSort,
    VoteState,
    VoteTarget,
)

__all__ = [
    # Identifiers
    "UserId",
    "CategoryId",
    "ThreadId",
    "CommentId",
    # Types
    "ActivityAction",
    "Actor",
    "CategoryStatus",
    "RequestOrigin",
    "Role",
    "Slug",
    "TagName",
    "ThreadSort",
    "VoteState",
    "VoteTarget",
]
