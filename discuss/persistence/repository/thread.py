"""PostgreSQL implementation of Thread repository."""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncIterator, Dict, List, Optional

import logfire
from sqlalchemy import desc, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.sql import Executable

from discuss.domain.model import NewThread, ThreadMetadata, ThreadTotals
from discuss.domain.repository.thread import ThreadRepository, ThreadTransaction
from discuss.domain.value import CategoryId, Slug, ThreadId, ThreadSort, UserId
from discuss.persistence.error import metadata_errors
from discuss.persistence.mappers import row_to_thread
from discuss.persistence.tables import threads_table


class PostgresThreadTransaction(ThreadTransaction):
    """Transaction bound to one session (and so one pooled connection)."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def insert(self, thread: NewThread) -> ThreadMetadata:
        """Insert a thread row; the id comes back from RETURNING."""
        with (
            logfire.span("thread_transaction.insert", slug=str(thread.slug)),
            metadata_errors("Thread"),
        ):
            stmt = (
                insert(threads_table)
                .values(
                    slug=str(thread.slug),
                    title=thread.title,
                    category_id=thread.category_id,
                    author_id=thread.author_id,
                )
                .returning(threads_table)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_thread(row._asdict())

    async def commit(self) -> None:
        with metadata_errors("Thread"):
            await self.session.commit()

    async def rollback(self) -> None:
        with metadata_errors("Thread"):
            await self.session.rollback()


class PostgresThreadRepository(ThreadRepository):
    """PostgreSQL implementation of ThreadRepository.

    Reads go through the request session. Writes each run in their own
    session from the factory and are committed before the method returns,
    so they never wait on (or get rolled back with) the request.
    """

    def __init__(
        self,
        session: AsyncSession,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        """Initialize repository.

        Args:
            session: Request-scoped session used for reads
            session_factory: Factory for autonomous write transactions
        """
        self.session = session
        self.session_factory = session_factory

    @asynccontextmanager
    async def begin(self) -> AsyncIterator[ThreadTransaction]:
        # Closing the session rolls back anything left uncommitted and
        # returns the connection to the pool.
        async with self.session_factory() as session:
            yield PostgresThreadTransaction(session)

    async def _write(self, stmt: Executable) -> Optional[Dict[str, Any]]:
        """Execute a single RETURNING statement in its own transaction."""
        with metadata_errors("Thread"):
            async with self.session_factory.begin() as session:
                result = await session.execute(stmt)
                row = result.fetchone()
                return row._asdict() if row else None

    async def find_by_id(self, thread_id: ThreadId) -> Optional[ThreadMetadata]:
        """Find a thread by ID."""
        with (
            logfire.span("thread_repository.find_by_id", thread_id=str(thread_id)),
            metadata_errors("Thread"),
        ):
            stmt = select(threads_table).where(threads_table.c.id == thread_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                logfire.warn("Thread not found", thread_id=str(thread_id))
                return None

            return row_to_thread(row._asdict())

    async def find_by_slug(self, slug: Slug) -> Optional[ThreadMetadata]:
        """Find a thread by slug."""
        with (
            logfire.span("thread_repository.find_by_slug", slug=str(slug)),
            metadata_errors("Thread"),
        ):
            stmt = select(threads_table).where(threads_table.c.slug == str(slug))
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                logfire.warn("Thread not found by slug", slug=str(slug))
                return None

            return row_to_thread(row._asdict())

    @staticmethod
    def _filtered(stmt, category_id: Optional[CategoryId], search: Optional[str]):
        if category_id is not None:
            stmt = stmt.where(threads_table.c.category_id == category_id)
        if search:
            stmt = stmt.where(threads_table.c.title.icontains(search, autoescape=True))
        return stmt

    async def find_all(
        self,
        category_id: Optional[CategoryId] = None,
        search: Optional[str] = None,
        sort: ThreadSort = ThreadSort.ACTIVITY,
        limit: int = 20,
        offset: int = 0,
    ) -> List[ThreadMetadata]:
        """Find threads with filtering and pagination."""
        with (
            logfire.span(
                "thread_repository.find_all",
                category_id=str(category_id) if category_id else None,
                search=search,
                sort=sort.value,
                limit=limit,
                offset=offset,
            ),
            metadata_errors("Thread"),
        ):
            stmt = self._filtered(select(threads_table), category_id, search)

            # Pinned threads first, then the requested order
            order = [desc(threads_table.c.is_pinned)]
            if sort == ThreadSort.ACTIVITY:
                order.append(threads_table.c.last_reply_at.desc().nulls_last())
            elif sort == ThreadSort.POPULAR:
                order.append(desc(threads_table.c.view_count))
            elif sort == ThreadSort.REPLIES:
                order.append(desc(threads_table.c.reply_count))
            order.append(desc(threads_table.c.created_at))

            stmt = stmt.order_by(*order).limit(limit).offset(offset)

            result = await self.session.execute(stmt)
            threads = [row_to_thread(row._asdict()) for row in result.fetchall()]

            logfire.info("Found threads", count=len(threads))
            return threads

    async def count(
        self,
        category_id: Optional[CategoryId] = None,
        search: Optional[str] = None,
    ) -> int:
        """Count threads matching the given filters."""
        with (
            logfire.span("thread_repository.count", search=search),
            metadata_errors("Thread"),
        ):
            stmt = self._filtered(
                select(func.count()).select_from(threads_table), category_id, search
            )
            result = await self.session.execute(stmt)
            return result.scalar() or 0

    async def find_ids(self, limit: int = 500, offset: int = 0) -> List[ThreadId]:
        with metadata_errors("Thread"):
            stmt = (
                select(threads_table.c.id)
                .order_by(threads_table.c.created_at, threads_table.c.id)
                .limit(limit)
                .offset(offset)
            )
            result = await self.session.execute(stmt)
            return [ThreadId(row.id) for row in result.fetchall()]

    async def increment_reply_count(
        self, thread_id: ThreadId, replied_by: UserId, replied_at: datetime
    ) -> bool:
        """Atomically add one reply and record who replied last."""
        with logfire.span(
            "thread_repository.increment_reply_count", thread_id=str(thread_id)
        ):
            stmt = (
                update(threads_table)
                .where(threads_table.c.id == thread_id)
                .values(
                    reply_count=threads_table.c.reply_count + 1,
                    last_reply_at=replied_at,
                    last_reply_by=replied_by,
                    updated_at=func.now(),
                )
                .returning(threads_table.c.id)
            )
            return await self._write(stmt) is not None

    async def decrement_reply_count(self, thread_id: ThreadId) -> bool:
        """Atomically remove one reply, floored at zero."""
        with logfire.span(
            "thread_repository.decrement_reply_count", thread_id=str(thread_id)
        ):
            stmt = (
                update(threads_table)
                .where(threads_table.c.id == thread_id)
                .values(
                    reply_count=func.greatest(threads_table.c.reply_count - 1, 0),
                    updated_at=func.now(),
                )
                .returning(threads_table.c.id)
            )
            return await self._write(stmt) is not None

    async def set_reply_count(
        self,
        thread_id: ThreadId,
        reply_count: int,
        expected: Optional[int] = None,
    ) -> bool:
        with logfire.span(
            "thread_repository.set_reply_count",
            thread_id=str(thread_id),
            reply_count=reply_count,
            expected=expected,
        ):
            stmt = update(threads_table).where(threads_table.c.id == thread_id)
            if expected is not None:
                stmt = stmt.where(threads_table.c.reply_count == expected)
            stmt = stmt.values(
                reply_count=max(reply_count, 0), updated_at=func.now()
            ).returning(threads_table.c.id)
            return await self._write(stmt) is not None

    async def increment_view_count(self, thread_id: ThreadId) -> None:
        """Atomically increment the view count by 1."""
        stmt = (
            update(threads_table)
            .where(threads_table.c.id == thread_id)
            .values(view_count=threads_table.c.view_count + 1)
            .returning(threads_table.c.id)
        )
        await self._write(stmt)

    async def toggle_pinned(self, thread_id: ThreadId) -> Optional[bool]:
        stmt = (
            update(threads_table)
            .where(threads_table.c.id == thread_id)
            .values(is_pinned=~threads_table.c.is_pinned, updated_at=func.now())
            .returning(threads_table.c.is_pinned)
        )
        row = await self._write(stmt)
        return row["is_pinned"] if row else None

    async def toggle_locked(self, thread_id: ThreadId) -> Optional[bool]:
        stmt = (
            update(threads_table)
            .where(threads_table.c.id == thread_id)
            .values(is_locked=~threads_table.c.is_locked, updated_at=func.now())
            .returning(threads_table.c.is_locked)
        )
        row = await self._write(stmt)
        return row["is_locked"] if row else None

    async def update_title(
        self, thread_id: ThreadId, title: str
    ) -> Optional[ThreadMetadata]:
        """Change a thread's title."""
        with logfire.span("thread_repository.update_title", thread_id=str(thread_id)):
            stmt = (
                update(threads_table)
                .where(threads_table.c.id == thread_id)
                .values(title=title, updated_at=func.now())
                .returning(threads_table)
            )
            row = await self._write(stmt)

            if row is None:
                logfire.warn("Thread not found", thread_id=str(thread_id))
                return None

            return row_to_thread(row)

    async def delete(self, thread_id: ThreadId) -> bool:
        """Delete a thread (hard delete)."""
        with logfire.span("thread_repository.delete", thread_id=str(thread_id)):
            stmt = (
                threads_table.delete()
                .where(threads_table.c.id == thread_id)
                .returning(threads_table.c.id)
            )
            return await self._write(stmt) is not None

    async def totals(self) -> ThreadTotals:
        """Count all threads and sum their reply counts."""
        with (
            logfire.span("thread_repository.totals"),
            metadata_errors("Thread"),
        ):
            stmt = select(
                func.count().label("total"),
                func.coalesce(func.sum(threads_table.c.reply_count), 0).label(
                    "total_replies"
                ),
            ).select_from(threads_table)
            result = await self.session.execute(stmt)
            row = result.one()
            return ThreadTotals(total=row.total, total_replies=row.total_replies)
