"""Response models shared by several use cases."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from discuss.domain.model import Category, Comment, ThreadContent, ThreadMetadata
from discuss.domain.value import UserId


class ThreadItem(BaseModel):
    """Thread metadata in responses."""

    thread_id: str
    slug: str
    title: str
    category_id: str
    author_id: str
    is_pinned: bool
    is_locked: bool
    view_count: int
    reply_count: int
    last_reply_at: datetime | None
    last_reply_by: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, thread: ThreadMetadata) -> "ThreadItem":
        return cls(
            thread_id=str(thread.id),
            slug=str(thread.slug),
            title=thread.title,
            category_id=str(thread.category_id),
            author_id=str(thread.author_id),
            is_pinned=thread.is_pinned,
            is_locked=thread.is_locked,
            view_count=thread.view_count,
            reply_count=thread.reply_count,
            last_reply_at=thread.last_reply_at,
            last_reply_by=str(thread.last_reply_by) if thread.last_reply_by else None,
            created_at=thread.created_at,
            updated_at=thread.updated_at,
        )


class CommentItem(BaseModel):
    """Comment in responses. Tombstones keep their id and parent."""

    comment_id: str
    author_id: str
    body: str
    parent_comment_id: str | None
    is_edited: bool
    edited_at: datetime | None
    is_deleted: bool
    deleted_at: datetime | None
    upvotes: int
    has_upvoted: bool
    created_at: datetime

    @classmethod
    def from_model(
        cls, comment: Comment, viewer_id: Optional[UserId] = None
    ) -> "CommentItem":
        return cls(
            comment_id=str(comment.id),
            author_id=str(comment.author_id),
            body=comment.body,
            parent_comment_id=(
                str(comment.parent_comment_id) if comment.parent_comment_id else None
            ),
            is_edited=comment.is_edited,
            edited_at=comment.edited_at,
            is_deleted=comment.is_deleted,
            deleted_at=comment.deleted_at,
            upvotes=comment.upvotes,
            has_upvoted=viewer_id is not None and comment.is_upvoted_by(viewer_id),
            created_at=comment.created_at,
        )


class OriginalPostItem(BaseModel):
    """Original post in responses."""

    author_id: str
    body: str
    is_edited: bool
    edited_at: datetime | None
    upvotes: int
    has_upvoted: bool


class ThreadContentItem(BaseModel):
    """Thread content document in responses."""

    original_post: OriginalPostItem
    comments: list[CommentItem]
    tags: list[str]

    @classmethod
    def from_model(
        cls, content: ThreadContent, viewer_id: Optional[UserId] = None
    ) -> "ThreadContentItem":
        op = content.original_post
        return cls(
            original_post=OriginalPostItem(
                author_id=str(op.author_id),
                body=op.body,
                is_edited=op.is_edited,
                edited_at=op.edited_at,
                upvotes=op.upvotes,
                has_upvoted=viewer_id is not None and op.is_upvoted_by(viewer_id),
            ),
            comments=[CommentItem.from_model(c, viewer_id) for c in content.comments],
            tags=[t.root for t in content.tags],
        )


class CategoryItem(BaseModel):
    """Category in responses."""

    category_id: str
    name: str
    slug: str
    description: str | None
    status: str
    thread_count: int
    created_at: datetime

    @classmethod
    def from_model(cls, category: Category) -> "CategoryItem":
        return cls(
            category_id=str(category.id),
            name=category.name,
            slug=str(category.slug),
            description=category.description,
            status=category.status.value,
            thread_count=category.thread_count,
            created_at=category.created_at,
        )
