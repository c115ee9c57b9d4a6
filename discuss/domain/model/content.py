"""Thread content document.

One document per thread, holding the original post and every comment.
Comments form a flat, append-only sequence; replies point at their parent
through parent_comment_id. Comments are never removed or reordered: deletion
turns them into tombstones so that replies keep a valid parent.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from discuss.domain.model.common import DomainModel, utc_now
from discuss.domain.value import CommentId, TagName, ThreadId, UserId


class OriginalPost(DomainModel):
    """The post that opens a thread."""

    author_id: UserId
    body: str = Field(min_length=1)
    is_edited: bool = False
    edited_at: Optional[datetime] = None
    upvotes: int = Field(default=0, ge=0)
    upvoted_by: list[UserId] = Field(default_factory=list)

    def is_upvoted_by(self, user_id: UserId) -> bool:
        return user_id in self.upvoted_by


class Comment(DomainModel):
    """Comment embedded in a thread's content document.

    State machine: active -> deleted (terminal). A deleted comment keeps its
    id, parent and position; its body reads as the placeholder.
    """

    id: CommentId
    author_id: UserId
    body: str = Field(min_length=1)
    parent_comment_id: Optional[CommentId] = None
    is_edited: bool = False
    edited_at: Optional[datetime] = None
    is_deleted: bool = False
    deleted_at: Optional[datetime] = None
    upvotes: int = Field(default=0, ge=0)
    upvoted_by: list[UserId] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def is_upvoted_by(self, user_id: UserId) -> bool:
        return user_id in self.upvoted_by


class ThreadContent(DomainModel):
    """Content document paired with a ThreadMetadata row."""

    thread_id: ThreadId
    original_post: OriginalPost
    comments: list[Comment] = Field(default_factory=list)
    tags: list[TagName] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def find_comment(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by id, tombstones included."""
        for comment in self.comments:
            if comment.id == comment_id:
                return comment
        return None

    @property
    def live_comment_count(self) -> int:
        """Number of comments that are not tombstoned (the reply count ground truth)."""
        return sum(1 for c in self.comments if not c.is_deleted)
