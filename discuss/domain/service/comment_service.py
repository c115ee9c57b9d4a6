"""Comment lifecycle domain service."""

from typing import Optional
from uuid import uuid4

import logfire

from discuss.config import ForumSettings
from discuss.domain.error import ForbiddenError, NotFoundError
from discuss.domain.model import Comment
from discuss.domain.model.common import utc_now
from discuss.domain.repository import ContentRepository, ThreadRepository
from discuss.domain.value import (
    ActivityAction,
    Actor,
    CommentId,
    RequestOrigin,
    ThreadId,
)
from discuss.domain.value.common import ValueObject

from .activity_recorder import ActivityRecorder
from .base import Service
from .reply_counter import ReplyCounterSynchronizer


class CommentResult(ValueObject):
    """A comment write plus whether the reply counter followed it.

    counter_synced=False means the comment is stored but the thread's
    reply_count is stale until reconciled.
    """

    comment: Comment
    counter_synced: bool = True


class CommentService(Service):
    """Domain service for adding, editing and tombstoning comments."""

    def __init__(
        self,
        thread_repository: ThreadRepository,
        content_repository: ContentRepository,
        reply_counter: ReplyCounterSynchronizer,
        activity_recorder: ActivityRecorder,
        forum_settings: ForumSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            thread_repository: Metadata store (existence and lock checks)
            content_repository: Content store holding the comments
            reply_counter: Keeps reply_count in step
            activity_recorder: Audit recorder
            forum_settings: Deleted-comment placeholder
        """
        self.thread_repository = thread_repository
        self.content_repository = content_repository
        self.reply_counter = reply_counter
        self.activity_recorder = activity_recorder
        self.forum_settings = forum_settings

    @staticmethod
    def _resource(thread_id: ThreadId, comment_id: CommentId) -> str:
        return f"thread:{thread_id}:comment:{comment_id}"

    async def add_comment(
        self,
        thread_id: ThreadId,
        actor: Actor,
        body: str,
        parent_comment_id: Optional[CommentId] = None,
        origin: Optional[RequestOrigin] = None,
    ) -> CommentResult:
        """Add a comment or reply to a thread.

        Args:
            thread_id: Thread to comment on
            actor: Author of the comment
            body: Comment text
            parent_comment_id: Comment being replied to (None for top-level)
            origin: Request origin for the audit entry

        Returns:
            The stored comment and the counter sync flag

        Raises:
            NotFoundError: If the thread, its content or the parent is missing
            ForbiddenError: If the thread is locked
        """
        with logfire.span(
            "comment_service.add_comment",
            thread_id=str(thread_id),
            author_id=str(actor.user_id),
            parent_comment_id=str(parent_comment_id) if parent_comment_id else None,
        ):
            thread = await self.thread_repository.find_by_id(thread_id)
            if thread is None:
                raise NotFoundError("Thread", str(thread_id))

            # Applies to moderators too; they unlock first
            if thread.is_locked:
                logfire.warn("Comment rejected, thread locked", thread_id=str(thread_id))
                raise ForbiddenError("Thread is locked")

            if parent_comment_id is not None:
                content = await self.content_repository.find_by_thread(thread_id)
                if content is None:
                    raise NotFoundError("Thread content", str(thread_id))
                # Tombstoned parents are still valid reply targets
                if content.find_comment(parent_comment_id) is None:
                    logfire.warn(
                        "Parent comment not found",
                        thread_id=str(thread_id),
                        parent_comment_id=str(parent_comment_id),
                    )
                    raise NotFoundError("Parent comment", str(parent_comment_id))

            now = utc_now()
            comment = Comment(
                id=CommentId(uuid4()),
                author_id=actor.user_id,
                body=body,
                parent_comment_id=parent_comment_id,
                created_at=now,
                updated_at=now,
            )

            stored = await self.content_repository.push_comment(thread_id, comment)
            if stored is None:
                raise NotFoundError("Thread content", str(thread_id))

            synced = await self.reply_counter.on_comment_created(
                thread_id, actor.user_id
            )
            logfire.info(
                "Comment added",
                thread_id=str(thread_id),
                comment_id=str(stored.id),
                counter_synced=synced,
            )

            self.activity_recorder.record(
                actor.user_id,
                ActivityAction.CREATE_COMMENT,
                resource=self._resource(thread_id, stored.id),
                metadata={
                    "parent_comment_id": (
                        str(parent_comment_id) if parent_comment_id else None
                    )
                },
                origin=origin,
            )
            return CommentResult(comment=stored, counter_synced=synced)

    async def _live_comment_for(
        self, thread_id: ThreadId, comment_id: CommentId, actor: Actor, verb: str
    ) -> Comment:
        content = await self.content_repository.find_by_thread(thread_id)
        comment = content.find_comment(comment_id) if content else None
        if comment is None or comment.is_deleted:
            raise NotFoundError("Comment", str(comment_id))

        if not actor.can_modify(comment.author_id):
            logfire.warn(
                "Comment change rejected, not author or moderator",
                comment_id=str(comment_id),
                actor_id=str(actor.user_id),
            )
            raise ForbiddenError(f"Only the author or a moderator can {verb} this comment")
        return comment

    async def edit_comment(
        self,
        thread_id: ThreadId,
        comment_id: CommentId,
        actor: Actor,
        body: str,
        origin: Optional[RequestOrigin] = None,
    ) -> CommentResult:
        """Replace the body of a live comment.

        Raises:
            NotFoundError: If the comment is missing or tombstoned
            ForbiddenError: If the actor is neither author nor moderator
        """
        with logfire.span(
            "comment_service.edit_comment",
            thread_id=str(thread_id),
            comment_id=str(comment_id),
        ):
            await self._live_comment_for(thread_id, comment_id, actor, "edit")

            # Conditional on the comment still being live
            updated = await self.content_repository.update_comment_body(
                thread_id, comment_id, body, edited_at=utc_now()
            )
            if updated is None:
                raise NotFoundError("Comment", str(comment_id))

            self.activity_recorder.record(
                actor.user_id,
                ActivityAction.UPDATE_COMMENT,
                resource=self._resource(thread_id, comment_id),
                origin=origin,
            )
            return CommentResult(comment=updated, counter_synced=True)

    async def soft_delete_comment(
        self,
        thread_id: ThreadId,
        comment_id: CommentId,
        actor: Actor,
        origin: Optional[RequestOrigin] = None,
    ) -> CommentResult:
        """Tombstone a comment: keep its place, replace its body.

        Raises:
            NotFoundError: If the comment is missing or already tombstoned
            ForbiddenError: If the actor is neither author nor moderator
        """
        with logfire.span(
            "comment_service.soft_delete_comment",
            thread_id=str(thread_id),
            comment_id=str(comment_id),
        ):
            await self._live_comment_for(thread_id, comment_id, actor, "delete")

            tombstone = await self.content_repository.tombstone_comment(
                thread_id,
                comment_id,
                placeholder=self.forum_settings.deleted_placeholder,
                deleted_at=utc_now(),
            )
            if tombstone is None:
                # Lost a race with another delete
                raise NotFoundError("Comment", str(comment_id))

            synced = await self.reply_counter.on_comment_deleted(thread_id)
            logfire.info(
                "Comment tombstoned",
                thread_id=str(thread_id),
                comment_id=str(comment_id),
                counter_synced=synced,
            )

            self.activity_recorder.record(
                actor.user_id,
                ActivityAction.DELETE_COMMENT,
                resource=self._resource(thread_id, comment_id),
                origin=origin,
            )
            return CommentResult(comment=tombstone, counter_synced=synced)
