"""Reconcile reply counts use case."""

import logfire
from pydantic import BaseModel, Field

from discuss.domain.error import NotFoundError, StoreUnavailableError
from discuss.domain.repository import ThreadRepository
from discuss.domain.service import ReplyCounterSynchronizer


class ReconcileReplyCountsRequest(BaseModel):
    """Reconcile request."""

    batch_size: int = Field(default=500, ge=1, le=5000)


class ReconcileReplyCountsResponse(BaseModel):
    """Reconcile summary."""

    checked: int = 0
    corrected: int = 0
    skipped: int = 0


class ReconcileReplyCountsUseCase:
    """Recompute every thread's reply_count from its live comments.

    Repairs drift left by counter updates that failed after their comment
    write succeeded. Threads that cannot be read right now are skipped and
    picked up on the next run.
    """

    def __init__(
        self,
        thread_repository: ThreadRepository,
        reply_counter: ReplyCounterSynchronizer,
    ) -> None:
        """Initialize reconcile use case.

        Args:
            thread_repository: Metadata store, for paging thread ids
            reply_counter: Performs the per-thread reconciliation
        """
        self.thread_repository = thread_repository
        self.reply_counter = reply_counter

    async def execute(
        self, request: ReconcileReplyCountsRequest
    ) -> ReconcileReplyCountsResponse:
        """Execute reconciliation over all threads, batch by batch."""
        summary = ReconcileReplyCountsResponse()
        with logfire.span("reconcile_reply_counts.execute", batch_size=request.batch_size):
            offset = 0
            while True:
                thread_ids = await self.thread_repository.find_ids(
                    limit=request.batch_size, offset=offset
                )
                if not thread_ids:
                    break
                offset += len(thread_ids)

                for thread_id in thread_ids:
                    try:
                        outcome = await self.reply_counter.reconcile(thread_id)
                    except (NotFoundError, StoreUnavailableError) as e:
                        logfire.warn(
                            "Skipping thread during reconcile",
                            thread_id=str(thread_id),
                            error=str(e),
                        )
                        summary.skipped += 1
                        continue

                    summary.checked += 1
                    if outcome.corrected:
                        summary.corrected += 1

            logfire.info(
                "Reply counts reconciled",
                checked=summary.checked,
                corrected=summary.corrected,
                skipped=summary.skipped,
            )
            return summary
