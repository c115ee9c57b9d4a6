"""Thread reads, edits and moderation."""

from typing import Optional

import logfire

from discuss.domain.error import (
    DomainError,
    ForbiddenError,
    NotFoundError,
    StoreUnavailableError,
)
from discuss.domain.model import ThreadContent, ThreadMetadata
from discuss.domain.model.common import utc_now
from discuss.domain.repository import ContentRepository, ThreadRepository
from discuss.domain.value import (
    ActivityAction,
    Actor,
    CategoryId,
    RequestOrigin,
    Slug,
    ThreadId,
    ThreadSort,
)
from discuss.domain.value.common import ValueObject

from .activity_recorder import ActivityRecorder
from .base import Service
from .thread_creation_saga import normalize_tags


class ThreadPage(ValueObject):
    """One page of a thread listing."""

    threads: list[ThreadMetadata]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.total else 0


class ThreadDetail(ValueObject):
    """Both halves of a thread."""

    thread: ThreadMetadata
    content: ThreadContent


class ThreadService(Service):
    """Domain service for reading, editing and moderating threads.

    Creation lives in ThreadCreationSaga.
    """

    def __init__(
        self,
        thread_repository: ThreadRepository,
        content_repository: ContentRepository,
        activity_recorder: ActivityRecorder,
    ) -> None:
        """Initialize thread service.

        Args:
            thread_repository: Metadata store
            content_repository: Content store
            activity_recorder: Audit recorder
        """
        self.thread_repository = thread_repository
        self.content_repository = content_repository
        self.activity_recorder = activity_recorder

    @staticmethod
    def _require_moderator(actor: Actor) -> None:
        if not actor.role.can_moderate:
            raise ForbiddenError("Only moderators can do this")

    async def _find_thread(self, thread_id: ThreadId) -> ThreadMetadata:
        thread = await self.thread_repository.find_by_id(thread_id)
        if thread is None:
            raise NotFoundError("Thread", str(thread_id))
        return thread

    async def list_threads(
        self,
        category_id: Optional[CategoryId] = None,
        search: Optional[str] = None,
        sort: ThreadSort = ThreadSort.ACTIVITY,
        page: int = 1,
        limit: int = 20,
    ) -> ThreadPage:
        """List threads, pinned first.

        Args:
            category_id: Only threads in this category
            search: Case-insensitive title substring
            sort: Ordering after pinned threads
            page: 1-based page number
            limit: Page size

        Returns:
            Page of threads with the total count
        """
        with logfire.span(
            "thread_service.list_threads",
            category_id=str(category_id) if category_id else None,
            sort=sort.value,
            page=page,
            limit=limit,
        ):
            search = search.strip() if search else None
            threads = await self.thread_repository.find_all(
                category_id=category_id,
                search=search,
                sort=sort,
                limit=limit,
                offset=(page - 1) * limit,
            )
            total = await self.thread_repository.count(
                category_id=category_id, search=search
            )
            return ThreadPage(threads=threads, total=total, page=page, limit=limit)

    async def get_thread(self, slug: str) -> ThreadDetail:
        """Read a thread by slug and count the view.

        The view count is best-effort: a failed increment is logged.

        Raises:
            NotFoundError: If the metadata or the content is missing
        """
        with logfire.span("thread_service.get_thread", slug=slug):
            try:
                parsed = Slug(slug)
            except ValueError:
                raise NotFoundError("Thread", slug)

            thread = await self.thread_repository.find_by_slug(parsed)
            if thread is None:
                raise NotFoundError("Thread", slug)

            content = await self.content_repository.find_by_thread(thread.id)
            if content is None:
                # Content not written yet (or lost); see ThreadCreationSaga
                logfire.warn("Thread content missing", thread_id=str(thread.id))
                raise NotFoundError("Thread content", str(thread.id))

            try:
                await self.thread_repository.increment_view_count(thread.id)
            except StoreUnavailableError as e:
                logfire.warn(
                    "View count increment failed", thread_id=str(thread.id), error=str(e)
                )

            return ThreadDetail(thread=thread, content=content)

    async def update_thread(
        self,
        thread_id: ThreadId,
        actor: Actor,
        title: Optional[str] = None,
        body: Optional[str] = None,
        tags: Optional[list[str]] = None,
        origin: Optional[RequestOrigin] = None,
    ) -> ThreadDetail:
        """Edit a thread's title, body or tags.

        Args:
            thread_id: Thread to edit
            actor: Author or moderator
            title: New title (metadata)
            body: New original post body (content)
            tags: New tag list (content)
            origin: Request origin for the audit entry

        Returns:
            Both halves after the edit

        Raises:
            NotFoundError: If the thread or its content is missing
            ForbiddenError: If the actor is neither author nor moderator
        """
        with logfire.span("thread_service.update_thread", thread_id=str(thread_id)):
            thread = await self._find_thread(thread_id)
            if not actor.can_modify(thread.author_id):
                raise ForbiddenError("Only the author or a moderator can edit this thread")

            if title is not None:
                updated = await self.thread_repository.update_title(thread_id, title)
                if updated is None:
                    raise NotFoundError("Thread", str(thread_id))
                thread = updated

            if body is not None or tags is not None:
                content = await self.content_repository.update_original_post(
                    thread_id,
                    edited_at=utc_now(),
                    body=body,
                    tags=normalize_tags(tags) if tags is not None else None,
                )
            else:
                content = await self.content_repository.find_by_thread(thread_id)
            if content is None:
                raise NotFoundError("Thread content", str(thread_id))

            changed = [
                name
                for name, value in (("title", title), ("body", body), ("tags", tags))
                if value is not None
            ]
            logfire.info("Thread updated", thread_id=str(thread_id), fields=changed)
            self.activity_recorder.record(
                actor.user_id,
                ActivityAction.UPDATE_THREAD,
                resource=f"thread:{thread_id}",
                metadata={"fields": changed},
                origin=origin,
            )
            return ThreadDetail(thread=thread, content=content)

    async def delete_thread(
        self,
        thread_id: ThreadId,
        actor: Actor,
        origin: Optional[RequestOrigin] = None,
    ) -> None:
        """Delete the metadata row, then the content document.

        The content delete is best-effort: a failure leaves orphan content
        and is logged.

        Raises:
            ForbiddenError: If the actor is not a moderator
            NotFoundError: If the thread does not exist
        """
        with logfire.span("thread_service.delete_thread", thread_id=str(thread_id)):
            self._require_moderator(actor)

            if not await self.thread_repository.delete(thread_id):
                raise NotFoundError("Thread", str(thread_id))

            try:
                await self.content_repository.delete(thread_id)
            except DomainError as e:
                logfire.error(
                    "Thread content delete failed, orphan content left",
                    thread_id=str(thread_id),
                    error=str(e),
                )

            self.activity_recorder.record(
                actor.user_id,
                ActivityAction.DELETE_THREAD,
                resource=f"thread:{thread_id}",
                origin=origin,
            )

    async def toggle_pin(self, thread_id: ThreadId, actor: Actor) -> bool:
        """Flip is_pinned and return the new value.

        Raises:
            ForbiddenError: If the actor is not a moderator
            NotFoundError: If the thread does not exist
        """
        with logfire.span("thread_service.toggle_pin", thread_id=str(thread_id)):
            self._require_moderator(actor)
            pinned = await self.thread_repository.toggle_pinned(thread_id)
            if pinned is None:
                raise NotFoundError("Thread", str(thread_id))
            logfire.info("Thread pin toggled", thread_id=str(thread_id), pinned=pinned)
            return pinned

    async def toggle_lock(self, thread_id: ThreadId, actor: Actor) -> bool:
        """Flip is_locked and return the new value.

        Raises:
            ForbiddenError: If the actor is not a moderator
            NotFoundError: If the thread does not exist
        """
        with logfire.span("thread_service.toggle_lock", thread_id=str(thread_id)):
            self._require_moderator(actor)
            locked = await self.thread_repository.toggle_locked(thread_id)
            if locked is None:
                raise NotFoundError("Thread", str(thread_id))
            logfire.info("Thread lock toggled", thread_id=str(thread_id), locked=locked)
            return locked
