"""Reply counter synchronization between content and metadata."""

import logfire

from discuss.domain.error import NotFoundError, StoreUnavailableError
from discuss.domain.model.common import utc_now
from discuss.domain.repository import ContentRepository, ThreadRepository
from discuss.domain.value import ThreadId, UserId
from discuss.domain.value.common import ValueObject

from .base import Service


class ReconcileOutcome(ValueObject):
    """Result of recomputing one thread's reply count.

    corrected is False when the counts matched, or when the stored count
    moved while reconciling and the write was skipped.
    """

    thread_id: ThreadId
    stored: int
    actual: int
    corrected: bool = False

    @property
    def drifted(self) -> bool:
        return self.stored != self.actual


class ReplyCounterSynchronizer(Service):
    """Keeps ThreadMetadata.reply_count in step with comment changes.

    The content document is the ground truth; the counter is derived. Sync
    failures are reported as False rather than raised, because the comment
    write they follow has already succeeded. reconcile() repairs the drift.
    """

    def __init__(
        self,
        thread_repository: ThreadRepository,
        content_repository: ContentRepository,
    ) -> None:
        """Initialize synchronizer.

        Args:
            thread_repository: Metadata store
            content_repository: Content store (read by reconcile only)
        """
        self.thread_repository = thread_repository
        self.content_repository = content_repository

    async def on_comment_created(self, thread_id: ThreadId, actor_id: UserId) -> bool:
        """Count a new comment and record it as the latest reply.

        Args:
            thread_id: Thread the comment was added to
            actor_id: Author of the comment

        Returns:
            True if the counter was updated
        """
        with logfire.span(
            "reply_counter.on_comment_created",
            thread_id=str(thread_id),
            actor_id=str(actor_id),
        ):
            try:
                updated = await self.thread_repository.increment_reply_count(
                    thread_id, replied_by=actor_id, replied_at=utc_now()
                )
            except StoreUnavailableError as e:
                logfire.error(
                    "Reply count increment failed, counter drifted",
                    thread_id=str(thread_id),
                    error=str(e),
                )
                return False

            if not updated:
                logfire.warn("Thread row missing for reply", thread_id=str(thread_id))
            return updated

    async def on_comment_deleted(self, thread_id: ThreadId) -> bool:
        """Uncount a tombstoned comment (never below zero).

        Returns:
            True if the counter was updated
        """
        with logfire.span("reply_counter.on_comment_deleted", thread_id=str(thread_id)):
            try:
                updated = await self.thread_repository.decrement_reply_count(thread_id)
            except StoreUnavailableError as e:
                logfire.error(
                    "Reply count decrement failed, counter drifted",
                    thread_id=str(thread_id),
                    error=str(e),
                )
                return False

            if not updated:
                logfire.warn("Thread row missing for reply", thread_id=str(thread_id))
            return updated

    async def reconcile(self, thread_id: ThreadId) -> ReconcileOutcome:
        """Recompute reply_count from the live comments of the thread.

        The overwrite only applies if reply_count is unchanged since it was
        read, so a counter update landing after that read is never
        overwritten. A comment written between the two reads can still leave
        drift behind; the next pass repairs it.

        Args:
            thread_id: Thread to reconcile

        Returns:
            Stored and recomputed counts

        Raises:
            NotFoundError: If either the metadata row or the content is missing
        """
        with logfire.span("reply_counter.reconcile", thread_id=str(thread_id)):
            thread = await self.thread_repository.find_by_id(thread_id)
            if thread is None:
                raise NotFoundError("Thread", str(thread_id))

            content = await self.content_repository.find_by_thread(thread_id)
            if content is None:
                raise NotFoundError("Thread content", str(thread_id))

            stored = thread.reply_count
            actual = content.live_comment_count
            if stored == actual:
                return ReconcileOutcome(thread_id=thread_id, stored=stored, actual=actual)

            logfire.info(
                "Correcting reply count",
                thread_id=str(thread_id),
                stored=stored,
                actual=actual,
            )
            corrected = await self.thread_repository.set_reply_count(
                thread_id, actual, expected=stored
            )
            if not corrected:
                logfire.warn(
                    "Reply count changed while reconciling, skipped",
                    thread_id=str(thread_id),
                )
            return ReconcileOutcome(
                thread_id=thread_id, stored=stored, actual=actual, corrected=corrected
            )
