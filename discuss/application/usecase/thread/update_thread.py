"""Update thread use case."""

from uuid import UUID

from pydantic import BaseModel

from discuss.application.usecase.views import ThreadContentItem, ThreadItem
from discuss.domain.service import ThreadService
from discuss.domain.value import Actor, RequestOrigin, ThreadId


class UpdateThreadRequest(BaseModel):
    """Update thread request. None fields are left unchanged."""

    thread_id: UUID
    actor: Actor
    title: str | None = None
    body: str | None = None
    tags: list[str] | None = None
    origin: RequestOrigin | None = None


class UpdateThreadResponse(BaseModel):
    """Update thread response."""

    thread: ThreadItem
    content: ThreadContentItem


class UpdateThreadUseCase:
    """Use case for editing a thread's title, body or tags."""

    def __init__(self, thread_service: ThreadService) -> None:
        self.thread_service = thread_service

    async def execute(self, request: UpdateThreadRequest) -> UpdateThreadResponse:
        """Execute update thread flow.

        Raises:
            NotFoundError: If the thread is missing
            ForbiddenError: If the actor is neither author nor moderator
        """
        detail = await self.thread_service.update_thread(
            ThreadId(request.thread_id),
            request.actor,
            title=request.title,
            body=request.body,
            tags=request.tags,
            origin=request.origin,
        )
        return UpdateThreadResponse(
            thread=ThreadItem.from_model(detail.thread),
            content=ThreadContentItem.from_model(detail.content, request.actor.user_id),
        )
