"""Mappers for converting between store records and domain models.

Domain models are immutable Pydantic models, so rows and documents are
mapped by hand rather than through an ORM.
"""

from typing import Any, Dict
from uuid import UUID

from discuss.domain.model import (
    ActivityLogEntry,
    Category,
    Comment,
    OriginalPost,
    ThreadContent,
    ThreadMetadata,
)
from discuss.domain.value import (
    CategoryId,
    CategoryStatus,
    Slug,
    TagName,
    ThreadId,
    UserId,
)
from discuss.persistence.documents import (
    ActivityLogDocument,
    CommentEmbed,
    OriginalPostEmbed,
    ThreadContentDocument,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_thread(row: Dict[str, Any]) -> ThreadMetadata:
    """Convert database row to ThreadMetadata domain model.

    Args:
        row: Database row as dict

    Returns:
        ThreadMetadata domain model
    """
    last_reply_by = row.get("last_reply_by")
    return ThreadMetadata(
        id=ThreadId(_uuid(row["id"])),
        slug=Slug(row["slug"]),
        title=row["title"],
        category_id=CategoryId(_uuid(row["category_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        is_pinned=row["is_pinned"],
        is_locked=row["is_locked"],
        view_count=row["view_count"],
        reply_count=row["reply_count"],
        last_reply_at=row.get("last_reply_at"),
        last_reply_by=UserId(_uuid(last_reply_by)) if last_reply_by else None,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_category(row: Dict[str, Any]) -> Category:
    """Convert database row to Category domain model.

    A thread_count column is picked up when the query computed one.
    """
    created_by = row.get("created_by")
    return Category(
        id=CategoryId(_uuid(row["id"])),
        name=row["name"],
        slug=Slug(row["slug"]),
        description=row.get("description"),
        status=CategoryStatus(row["status"]),
        created_by=UserId(_uuid(created_by)) if created_by else None,
        created_at=row["created_at"],
        thread_count=row.get("thread_count") or 0,
    )


def embed_to_comment(embed: CommentEmbed) -> Comment:
    """Convert an embedded comment to the Comment domain model."""
    return Comment(
        id=embed.id,
        author_id=UserId(embed.author_id),
        body=embed.body,
        parent_comment_id=embed.parent_comment_id,
        is_edited=embed.is_edited,
        edited_at=embed.edited_at,
        is_deleted=embed.is_deleted,
        deleted_at=embed.deleted_at,
        upvotes=embed.upvotes,
        upvoted_by=[UserId(u) for u in embed.upvoted_by],
        created_at=embed.created_at,
        updated_at=embed.updated_at,
    )


def comment_to_embed(comment: Comment) -> CommentEmbed:
    """Convert a Comment domain model to its embedded form."""
    return CommentEmbed(**comment.model_dump())


def document_to_content(doc: ThreadContentDocument) -> ThreadContent:
    """Convert a content document to the ThreadContent domain model.

    Args:
        doc: Document as loaded by beanie

    Returns:
        ThreadContent domain model
    """
    op = doc.original_post
    return ThreadContent(
        thread_id=ThreadId(doc.thread_id),
        original_post=OriginalPost(
            author_id=UserId(op.author_id),
            body=op.body,
            is_edited=op.is_edited,
            edited_at=op.edited_at,
            upvotes=op.upvotes,
            upvoted_by=[UserId(u) for u in op.upvoted_by],
        ),
        comments=[embed_to_comment(c) for c in doc.comments],
        tags=[TagName(t) for t in doc.tags],
        created_at=doc.created_at,
        updated_at=doc.updated_at,
    )


def content_to_document(content: ThreadContent) -> ThreadContentDocument:
    """Convert a ThreadContent domain model to a new document."""
    return ThreadContentDocument(
        thread_id=content.thread_id,
        original_post=OriginalPostEmbed(**content.original_post.model_dump()),
        comments=[comment_to_embed(c) for c in content.comments],
        tags=[t.root for t in content.tags],
        created_at=content.created_at,
        updated_at=content.updated_at,
    )


def entry_to_document(entry: ActivityLogEntry) -> ActivityLogDocument:
    """Convert an ActivityLogEntry to a new activity document."""
    return ActivityLogDocument(
        actor_id=entry.actor_id,
        action=entry.action.value,
        resource=entry.resource,
        metadata=entry.metadata,
        ip_address=entry.ip_address,
        user_agent=entry.user_agent,
        created_at=entry.created_at,
    )


def document_to_entry(doc: ActivityLogDocument) -> ActivityLogEntry:
    """Convert an activity document to the ActivityLogEntry domain model."""
    return ActivityLogEntry(
        actor_id=UserId(doc.actor_id) if doc.actor_id else None,
        action=doc.action,
        resource=doc.resource,
        metadata=doc.metadata,
        ip_address=doc.ip_address,
        user_agent=doc.user_agent,
        created_at=doc.created_at,
    )
