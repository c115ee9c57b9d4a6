"""MongoDB (beanie) implementation of Content repository."""

from datetime import datetime
from typing import Any, Dict, Optional

import logfire
from beanie import UpdateResponse

from discuss.domain.error import ConflictError
from discuss.domain.model import Comment, ThreadContent
from discuss.domain.repository.content import ContentRepository
from discuss.domain.value import CommentId, TagName, ThreadId, UserId, VoteState
from discuss.persistence.documents import ThreadContentDocument
from discuss.persistence.error import content_errors
from discuss.persistence.mappers import (
    comment_to_embed,
    content_to_document,
    document_to_content,
    embed_to_comment,
)

# Both conditional updates miss only when another request flips the same vote
# in between.
_TOGGLE_ATTEMPTS = 3


def _live_comment(comment_id: CommentId, **extra: Any) -> Dict[str, Any]:
    return {"comments": {"$elemMatch": {"id": comment_id, "is_deleted": False, **extra}}}


class MongoContentRepository(ContentRepository):
    """MongoDB implementation of ContentRepository.

    Every mutation is a single conditional update on one document, so
    concurrent writers never overwrite each other's comments or votes.
    """

    async def _update(
        self, query: Dict[str, Any], *updates: Dict[str, Any]
    ) -> Optional[ThreadContentDocument]:
        """Apply an update to the document matching query, returning it after."""
        with content_errors():
            return await ThreadContentDocument.find_one(query).update(
                *updates, response_type=UpdateResponse.NEW_DOCUMENT
            )

    @staticmethod
    def _comment_in(
        doc: ThreadContentDocument, comment_id: CommentId
    ) -> Optional[Comment]:
        for embed in doc.comments:
            if embed.id == comment_id:
                return embed_to_comment(embed)
        return None

    async def create(self, content: ThreadContent) -> ThreadContent:
        """Insert a new content document."""
        with (
            logfire.span(
                "content_repository.create", thread_id=str(content.thread_id)
            ),
            content_errors(),
        ):
            doc = content_to_document(content)
            await doc.insert()
            logfire.info("Thread content created", thread_id=str(content.thread_id))
            return document_to_content(doc)

    async def find_by_thread(self, thread_id: ThreadId) -> Optional[ThreadContent]:
        """Find the content document of a thread."""
        with (
            logfire.span("content_repository.find_by_thread", thread_id=str(thread_id)),
            content_errors(),
        ):
            doc = await ThreadContentDocument.find_one({"thread_id": thread_id})

            if doc is None:
                logfire.warn("Thread content not found", thread_id=str(thread_id))
                return None

            return document_to_content(doc)

    async def delete(self, thread_id: ThreadId) -> bool:
        """Delete the content document of a thread."""
        with (
            logfire.span("content_repository.delete", thread_id=str(thread_id)),
            content_errors(),
        ):
            result = await ThreadContentDocument.find({"thread_id": thread_id}).delete()
            return bool(result and result.deleted_count)

    async def update_original_post(
        self,
        thread_id: ThreadId,
        edited_at: datetime,
        body: Optional[str] = None,
        tags: Optional[list[TagName]] = None,
    ) -> Optional[ThreadContent]:
        """Edit the original post body and/or tags."""
        with logfire.span(
            "content_repository.update_original_post", thread_id=str(thread_id)
        ):
            changes: Dict[str, Any] = {"updated_at": edited_at}
            if body is not None:
                changes["original_post.body"] = body
                changes["original_post.is_edited"] = True
                changes["original_post.edited_at"] = edited_at
            if tags is not None:
                changes["tags"] = [t.root for t in tags]

            doc = await self._update({"thread_id": thread_id}, {"$set": changes})
            return document_to_content(doc) if doc else None

    async def push_comment(
        self, thread_id: ThreadId, comment: Comment
    ) -> Optional[Comment]:
        """Append a comment to the thread's comment sequence."""
        with logfire.span(
            "content_repository.push_comment",
            thread_id=str(thread_id),
            comment_id=str(comment.id),
        ):
            doc = await self._update(
                {"thread_id": thread_id},
                {
                    "$push": {"comments": comment_to_embed(comment).model_dump()},
                    "$set": {"updated_at": comment.created_at},
                },
            )

            if doc is None:
                logfire.warn("Thread content not found", thread_id=str(thread_id))
                return None

            return self._comment_in(doc, comment.id)

    async def update_comment_body(
        self,
        thread_id: ThreadId,
        comment_id: CommentId,
        body: str,
        edited_at: datetime,
    ) -> Optional[Comment]:
        """Replace a live comment's body."""
        with logfire.span(
            "content_repository.update_comment_body",
            thread_id=str(thread_id),
            comment_id=str(comment_id),
        ):
            doc = await self._update(
                {"thread_id": thread_id, **_live_comment(comment_id)},
                {
                    "$set": {
                        "comments.$.body": body,
                        "comments.$.is_edited": True,
                        "comments.$.edited_at": edited_at,
                        "comments.$.updated_at": edited_at,
                        "updated_at": edited_at,
                    }
                },
            )
            return self._comment_in(doc, comment_id) if doc else None

    async def tombstone_comment(
        self,
        thread_id: ThreadId,
        comment_id: CommentId,
        placeholder: str,
        deleted_at: datetime,
    ) -> Optional[Comment]:
        """Soft-delete a live comment in place."""
        with logfire.span(
            "content_repository.tombstone_comment",
            thread_id=str(thread_id),
            comment_id=str(comment_id),
        ):
            doc = await self._update(
                {"thread_id": thread_id, **_live_comment(comment_id)},
                {
                    "$set": {
                        "comments.$.body": placeholder,
                        "comments.$.is_deleted": True,
                        "comments.$.deleted_at": deleted_at,
                        "comments.$.updated_at": deleted_at,
                        "updated_at": deleted_at,
                    }
                },
            )
            return self._comment_in(doc, comment_id) if doc else None

    async def toggle_post_upvote(
        self, thread_id: ThreadId, voter_id: UserId
    ) -> Optional[VoteState]:
        """Toggle voter_id's upvote on the original post."""
        with logfire.span(
            "content_repository.toggle_post_upvote",
            thread_id=str(thread_id),
            voter_id=str(voter_id),
        ):
            for _ in range(_TOGGLE_ATTEMPTS):
                doc = await self._update(
                    {
                        "thread_id": thread_id,
                        "original_post.upvoted_by": {"$ne": voter_id},
                    },
                    {
                        "$addToSet": {"original_post.upvoted_by": voter_id},
                        "$inc": {"original_post.upvotes": 1},
                    },
                )
                if doc is not None:
                    return VoteState(count=doc.original_post.upvotes, voted=True)

                doc = await self._update(
                    {"thread_id": thread_id, "original_post.upvoted_by": voter_id},
                    {
                        "$pull": {"original_post.upvoted_by": voter_id},
                        "$inc": {"original_post.upvotes": -1},
                    },
                )
                if doc is not None:
                    return VoteState(count=doc.original_post.upvotes, voted=False)

                with content_errors():
                    exists = await ThreadContentDocument.find_one(
                        {"thread_id": thread_id}
                    )
                if exists is None:
                    return None

            raise ConflictError("Vote", "changed concurrently, retry")

    async def toggle_comment_upvote(
        self, thread_id: ThreadId, comment_id: CommentId, voter_id: UserId
    ) -> Optional[VoteState]:
        """Toggle voter_id's upvote on a live comment."""
        with logfire.span(
            "content_repository.toggle_comment_upvote",
            thread_id=str(thread_id),
            comment_id=str(comment_id),
            voter_id=str(voter_id),
        ):
            for _ in range(_TOGGLE_ATTEMPTS):
                doc = await self._update(
                    {
                        "thread_id": thread_id,
                        **_live_comment(comment_id, upvoted_by={"$ne": voter_id}),
                    },
                    {
                        "$addToSet": {"comments.$.upvoted_by": voter_id},
                        "$inc": {"comments.$.upvotes": 1},
                    },
                )
                if doc is not None:
                    comment = self._comment_in(doc, comment_id)
                    return VoteState(count=comment.upvotes, voted=True)

                doc = await self._update(
                    {
                        "thread_id": thread_id,
                        **_live_comment(comment_id, upvoted_by=voter_id),
                    },
                    {
                        "$pull": {"comments.$.upvoted_by": voter_id},
                        "$inc": {"comments.$.upvotes": -1},
                    },
                )
                if doc is not None:
                    comment = self._comment_in(doc, comment_id)
                    return VoteState(count=comment.upvotes, voted=False)

                with content_errors():
                    exists = await ThreadContentDocument.find_one(
                        {"thread_id": thread_id, **_live_comment(comment_id)}
                    )
                if exists is None:
                    return None

            raise ConflictError("Vote", "changed concurrently, retry")
