"""Thread metadata repository interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from datetime import datetime
from typing import List, Optional

from discuss.domain.model.thread import NewThread, ThreadMetadata, ThreadTotals
from discuss.domain.value import CategoryId, Slug, ThreadId, ThreadSort, UserId


class ThreadTransaction(ABC):
    """Transaction scope on the metadata store.

    Holds one connection exclusively from begin to commit/rollback.
    Writes made through it are invisible to other sessions until commit.
    """

    @abstractmethod
    async def insert(self, thread: NewThread) -> ThreadMetadata:
        """Insert a thread row inside this transaction.

        Args:
            thread: Thread to insert (the store assigns the id)

        Returns:
            The inserted, still uncommitted, thread

        Raises:
            ConflictError: If the slug is already taken
        """
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Commit the transaction.

        Raises:
            StoreUnavailableError: If the commit could not be completed
        """
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Roll the transaction back."""
        pass


class ThreadRepository(ABC):
    """Repository for thread metadata.

    Every method except those on ThreadTransaction is autonomous: it runs in
    its own short transaction and is committed when it returns.
    """

    @abstractmethod
    def begin(self) -> AbstractAsyncContextManager[ThreadTransaction]:
        """Open a transaction scope.

        The scope rolls back anything not committed and releases its
        connection on every exit path.
        """
        pass

    @abstractmethod
    async def find_by_id(self, thread_id: ThreadId) -> Optional[ThreadMetadata]:
        """Find a thread by ID.

        Args:
            thread_id: The thread's unique identifier

        Returns:
            The thread if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_slug(self, slug: Slug) -> Optional[ThreadMetadata]:
        """Find a thread by slug.

        Args:
            slug: The thread's slug

        Returns:
            The thread if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        category_id: Optional[CategoryId] = None,
        search: Optional[str] = None,
        sort: ThreadSort = ThreadSort.ACTIVITY,
        limit: int = 20,
        offset: int = 0,
    ) -> List[ThreadMetadata]:
        """Find threads with filtering and pagination.

        Pinned threads always sort first.

        Args:
            category_id: Filter by category (None for all)
            search: Case-insensitive title substring (None for no filter)
            sort: Sort order after pinning
            limit: Maximum number of threads to return
            offset: Number of threads to skip

        Returns:
            List of threads matching the criteria
        """
        pass

    @abstractmethod
    async def count(
        self,
        category_id: Optional[CategoryId] = None,
        search: Optional[str] = None,
    ) -> int:
        """Count threads matching the given filters."""
        pass

    @abstractmethod
    async def find_ids(self, limit: int = 500, offset: int = 0) -> List[ThreadId]:
        """List thread ids in creation order, for batch jobs."""
        pass

    @abstractmethod
    async def increment_reply_count(
        self, thread_id: ThreadId, replied_by: UserId, replied_at: datetime
    ) -> bool:
        """Atomically add one reply and bump last-reply info.

        Args:
            thread_id: The thread ID
            replied_by: Author of the new comment
            replied_at: When the comment was written

        Returns:
            True if the row was updated, False if it does not exist
        """
        pass

    @abstractmethod
    async def decrement_reply_count(self, thread_id: ThreadId) -> bool:
        """Atomically remove one reply, never going below zero.

        last_reply_at / last_reply_by are left untouched.

        Returns:
            True if the row was updated, False if it does not exist
        """
        pass

    @abstractmethod
    async def set_reply_count(
        self,
        thread_id: ThreadId,
        reply_count: int,
        expected: Optional[int] = None,
    ) -> bool:
        """Overwrite the derived reply count (reconciliation only).

        Args:
            thread_id: The thread ID
            reply_count: New value
            expected: Only write if the stored count still equals this

        Returns:
            True if the row was updated, False if it does not exist or the
            stored count no longer matches expected
        """
        pass

    @abstractmethod
    async def increment_view_count(self, thread_id: ThreadId) -> None:
        """Atomically increment the view count by 1."""
        pass

    @abstractmethod
    async def toggle_pinned(self, thread_id: ThreadId) -> Optional[bool]:
        """Flip is_pinned.

        Returns:
            The new value, or None if the thread does not exist
        """
        pass

    @abstractmethod
    async def toggle_locked(self, thread_id: ThreadId) -> Optional[bool]:
        """Flip is_locked.

        Returns:
            The new value, or None if the thread does not exist
        """
        pass

    @abstractmethod
    async def update_title(
        self, thread_id: ThreadId, title: str
    ) -> Optional[ThreadMetadata]:
        """Change a thread's title (the slug is kept).

        Returns:
            Updated thread, or None if it does not exist
        """
        pass

    @abstractmethod
    async def delete(self, thread_id: ThreadId) -> bool:
        """Delete a thread row (hard delete).

        Returns:
            True if a row was deleted
        """
        pass

    @abstractmethod
    async def totals(self) -> ThreadTotals:
        """Count all threads and sum their reply counts."""
        pass
