"""Get thread use case."""

from uuid import UUID

from pydantic import BaseModel

from discuss.application.usecase.views import ThreadContentItem, ThreadItem
from discuss.domain.service import ThreadService
from discuss.domain.value import UserId


class GetThreadRequest(BaseModel):
    """Get thread request."""

    slug: str
    viewer_id: UUID | None = None  # Current user (if authenticated)


class GetThreadResponse(BaseModel):
    """Get thread response: metadata plus content."""

    thread: ThreadItem
    content: ThreadContentItem


class GetThreadUseCase:
    """Use case for reading a thread by slug."""

    def __init__(self, thread_service: ThreadService) -> None:
        self.thread_service = thread_service

    async def execute(self, request: GetThreadRequest) -> GetThreadResponse:
        """Read both halves of a thread and count the view.

        Raises:
            NotFoundError: If the thread or its content is missing
        """
        detail = await self.thread_service.get_thread(request.slug)
        viewer = UserId(request.viewer_id) if request.viewer_id else None
        return GetThreadResponse(
            thread=ThreadItem.from_model(detail.thread),
            content=ThreadContentItem.from_model(detail.content, viewer),
        )
