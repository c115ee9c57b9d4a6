"""In-memory thread repository for testing."""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Optional
from uuid import uuid4

from discuss.domain.error import ConflictError
from discuss.domain.model import NewThread, ThreadMetadata, ThreadTotals
from discuss.domain.model.common import utc_now
from discuss.domain.repository.thread import ThreadRepository, ThreadTransaction
from discuss.domain.value import CategoryId, Slug, ThreadId, ThreadSort, UserId


class InMemoryThreadTransaction(ThreadTransaction):
    """Stages inserts until commit."""

    def __init__(self, repository: "InMemoryThreadRepository") -> None:
        self._repository = repository
        self._staged: dict[ThreadId, ThreadMetadata] = {}
        self.committed = False
        self.rolled_back = False

    async def insert(self, thread: NewThread) -> ThreadMetadata:
        if self._repository.slug_taken(thread.slug) or any(
            t.slug == thread.slug for t in self._staged.values()
        ):
            raise ConflictError("Thread")

        now = utc_now()
        row = ThreadMetadata(
            id=ThreadId(uuid4()),
            slug=thread.slug,
            title=thread.title,
            category_id=thread.category_id,
            author_id=thread.author_id,
            created_at=now,
            updated_at=now,
        )
        self._staged[row.id] = row
        return row

    async def commit(self) -> None:
        self._repository._threads.update(self._staged)
        self._staged = {}
        self.committed = True

    async def rollback(self) -> None:
        self._staged = {}
        self.rolled_back = True


class InMemoryThreadRepository(ThreadRepository):
    """In-memory implementation of ThreadRepository for testing."""

    def __init__(self) -> None:
        self._threads: dict[ThreadId, ThreadMetadata] = {}
        self.transactions: list[InMemoryThreadTransaction] = []

    def slug_taken(self, slug: Slug) -> bool:
        return any(t.slug == slug for t in self._threads.values())

    def _transaction(self) -> InMemoryThreadTransaction:
        return InMemoryThreadTransaction(self)

    @asynccontextmanager
    async def begin(self) -> AsyncIterator[ThreadTransaction]:
        tx = self._transaction()
        self.transactions.append(tx)
        try:
            yield tx
        finally:
            if not tx.committed:
                await tx.rollback()

    async def find_by_id(self, thread_id: ThreadId) -> Optional[ThreadMetadata]:
        return self._threads.get(thread_id)

    async def find_by_slug(self, slug: Slug) -> Optional[ThreadMetadata]:
        for thread in self._threads.values():
            if thread.slug == slug:
                return thread
        return None

    def _filtered(
        self, category_id: Optional[CategoryId], search: Optional[str]
    ) -> list[ThreadMetadata]:
        threads = list(self._threads.values())
        if category_id is not None:
            threads = [t for t in threads if t.category_id == category_id]
        if search:
            needle = search.lower()
            threads = [t for t in threads if needle in t.title.lower()]
        return threads

    async def find_all(
        self,
        category_id: Optional[CategoryId] = None,
        search: Optional[str] = None,
        sort: ThreadSort = ThreadSort.ACTIVITY,
        limit: int = 20,
        offset: int = 0,
    ) -> list[ThreadMetadata]:
        threads = self._filtered(category_id, search)

        # Stable sorts applied from least to most significant key
        threads.sort(key=lambda t: t.created_at, reverse=True)
        if sort == ThreadSort.ACTIVITY:
            threads.sort(
                key=lambda t: (t.last_reply_at is not None, t.last_reply_at or datetime.min),
                reverse=True,
            )
        elif sort == ThreadSort.POPULAR:
            threads.sort(key=lambda t: t.view_count, reverse=True)
        elif sort == ThreadSort.REPLIES:
            threads.sort(key=lambda t: t.reply_count, reverse=True)
        threads.sort(key=lambda t: t.is_pinned, reverse=True)

        return threads[offset : offset + limit]

    async def count(
        self,
        category_id: Optional[CategoryId] = None,
        search: Optional[str] = None,
    ) -> int:
        return len(self._filtered(category_id, search))

    async def find_ids(self, limit: int = 500, offset: int = 0) -> list[ThreadId]:
        threads = sorted(self._threads.values(), key=lambda t: t.created_at)
        return [t.id for t in threads[offset : offset + limit]]

    def _replace(self, thread_id: ThreadId, **changes) -> Optional[ThreadMetadata]:
        thread = self._threads.get(thread_id)
        if thread is None:
            return None
        updated = thread.evolve(updated_at=utc_now(), **changes)
        self._threads[thread_id] = updated
        return updated

    async def increment_reply_count(
        self, thread_id: ThreadId, replied_by: UserId, replied_at: datetime
    ) -> bool:
        thread = self._threads.get(thread_id)
        if thread is None:
            return False
        self._replace(
            thread_id,
            reply_count=thread.reply_count + 1,
            last_reply_at=replied_at,
            last_reply_by=replied_by,
        )
        return True

    async def decrement_reply_count(self, thread_id: ThreadId) -> bool:
        thread = self._threads.get(thread_id)
        if thread is None:
            return False
        self._replace(thread_id, reply_count=max(thread.reply_count - 1, 0))
        return True

    async def set_reply_count(
        self,
        thread_id: ThreadId,
        reply_count: int,
        expected: Optional[int] = None,
    ) -> bool:
        thread = self._threads.get(thread_id)
        if thread is None:
            return False
        if expected is not None and thread.reply_count != expected:
            return False
        self._replace(thread_id, reply_count=max(reply_count, 0))
        return True

    async def increment_view_count(self, thread_id: ThreadId) -> None:
        thread = self._threads.get(thread_id)
        if thread is not None:
            self._threads[thread_id] = thread.evolve(view_count=thread.view_count + 1)

    async def toggle_pinned(self, thread_id: ThreadId) -> Optional[bool]:
        thread = self._threads.get(thread_id)
        if thread is None:
            return None
        return self._replace(thread_id, is_pinned=not thread.is_pinned).is_pinned

    async def toggle_locked(self, thread_id: ThreadId) -> Optional[bool]:
        thread = self._threads.get(thread_id)
        if thread is None:
            return None
        return self._replace(thread_id, is_locked=not thread.is_locked).is_locked

    async def update_title(
        self, thread_id: ThreadId, title: str
    ) -> Optional[ThreadMetadata]:
        return self._replace(thread_id, title=title)

    async def delete(self, thread_id: ThreadId) -> bool:
        return self._threads.pop(thread_id, None) is not None

    async def totals(self) -> ThreadTotals:
        return ThreadTotals(
            total=len(self._threads),
            total_replies=sum(t.reply_count for t in self._threads.values()),
        )
