"""Thread creation across the metadata and content stores."""

from typing import Optional

import logfire

from discuss.config import ForumSettings
from discuss.domain.error import NotFoundError
from discuss.domain.model import NewThread, OriginalPost, ThreadContent, ThreadMetadata
from discuss.domain.repository import ContentRepository, ThreadRepository
from discuss.domain.value import (
    ActivityAction,
    CategoryId,
    RequestOrigin,
    TagName,
    ThreadId,
    UserId,
)

from .activity_recorder import ActivityRecorder
from .base import Service
from .category_service import CategoryService
from .slug import make_thread_slug


def normalize_tags(tags: Optional[list[str]]) -> list[TagName]:
    """Lower-case, trim and de-duplicate tags, keeping first occurrence order."""
    seen: list[TagName] = []
    for raw in tags or []:
        tag = TagName(raw)
        if tag not in seen:
            seen.append(tag)
    return seen


class ThreadCreationSaga(Service):
    """Creates a thread's metadata row and content document together.

    There is no transaction spanning both stores. The row is inserted in an
    open transaction, the content is written, and only then is the row
    committed. Any failure before the commit completes undoes whatever was
    written, so a successful return is the only way both halves persist.

    One gap is accepted: a commit that lands but is reported as failed (the
    acknowledgement is lost) still triggers the content delete, leaving a
    committed row without content. Readers of such a thread get
    NotFoundError for its content.
    """

    def __init__(
        self,
        thread_repository: ThreadRepository,
        content_repository: ContentRepository,
        category_service: CategoryService,
        activity_recorder: ActivityRecorder,
        forum_settings: ForumSettings,
    ) -> None:
        """Initialize saga.

        Args:
            thread_repository: Metadata store
            content_repository: Content store
            category_service: Category registry
            activity_recorder: Audit recorder
            forum_settings: Slug suffix length
        """
        self.thread_repository = thread_repository
        self.content_repository = content_repository
        self.category_service = category_service
        self.activity_recorder = activity_recorder
        self.forum_settings = forum_settings

    async def create_thread(
        self,
        title: str,
        body: str,
        category_id: CategoryId,
        author_id: UserId,
        tags: Optional[list[str]] = None,
        origin: Optional[RequestOrigin] = None,
    ) -> ThreadMetadata:
        """Create a thread in both stores.

        Args:
            title: Thread title
            body: Original post body
            category_id: Target category (must be active)
            author_id: Author
            tags: Free-form tags
            origin: Request origin for the audit entry

        Returns:
            The committed thread metadata

        Raises:
            NotFoundError: If the category is missing or archived
            ConflictError: If the generated slug collides
            StoreUnavailableError: If either store fails (after compensation)
        """
        with logfire.span(
            "thread_creation_saga.create_thread",
            category_id=str(category_id),
            author_id=str(author_id),
        ):
            if not await self.category_service.category_is_active(category_id):
                logfire.warn("Category missing or inactive", category_id=str(category_id))
                raise NotFoundError("Category", str(category_id))

            new_thread = NewThread(
                title=title,
                slug=make_thread_slug(title, self.forum_settings.slug_suffix_length),
                category_id=category_id,
                author_id=author_id,
            )

            async with self.thread_repository.begin() as tx:
                thread = await tx.insert(new_thread)

                try:
                    await self.content_repository.create(
                        ThreadContent(
                            thread_id=thread.id,
                            original_post=OriginalPost(author_id=author_id, body=body),
                            tags=normalize_tags(tags),
                        )
                    )
                except Exception as e:
                    logfire.error(
                        "Content write failed, rolling back thread",
                        thread_id=str(thread.id),
                        error_type=type(e).__name__,
                    )
                    await self._rollback(tx, thread.id)
                    await self._discard_content(thread.id)
                    raise

                try:
                    await tx.commit()
                except Exception as e:
                    logfire.error(
                        "Thread commit failed, discarding content",
                        thread_id=str(thread.id),
                        error_type=type(e).__name__,
                    )
                    await self._discard_content(thread.id)
                    raise

            logfire.info(
                "Thread created", thread_id=str(thread.id), slug=str(thread.slug)
            )
            self.activity_recorder.record(
                author_id,
                ActivityAction.CREATE_THREAD,
                resource=f"thread:{thread.id}",
                metadata={"title": title, "category_id": str(category_id)},
                origin=origin,
            )
            return thread

    async def _rollback(self, tx, thread_id: ThreadId) -> None:
        # Leaving the transaction scope rolls back too, so a failure here
        # only gets logged.
        try:
            await tx.rollback()
        except Exception as e:
            logfire.warn(
                "Explicit rollback failed",
                thread_id=str(thread_id),
                error_type=type(e).__name__,
            )

    async def _discard_content(self, thread_id: ThreadId) -> None:
        """Best-effort removal of a (possibly partial) content document."""
        try:
            await self.content_repository.delete(thread_id)
        except Exception as e:
            logfire.error(
                "Compensating content delete failed, orphan content possible",
                thread_id=str(thread_id),
                error_type=type(e).__name__,
            )
