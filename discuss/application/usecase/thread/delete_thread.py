"""Delete thread use case."""

from uuid import UUID

from pydantic import BaseModel

from discuss.domain.service import ThreadService
from discuss.domain.value import Actor, RequestOrigin, ThreadId


class DeleteThreadRequest(BaseModel):
    """Delete thread request."""

    thread_id: UUID
    actor: Actor
    origin: RequestOrigin | None = None


class DeleteThreadUseCase:
    """Use case for deleting a thread and its content (moderators only)."""

    def __init__(self, thread_service: ThreadService) -> None:
        self.thread_service = thread_service

    async def execute(self, request: DeleteThreadRequest) -> None:
        await self.thread_service.delete_thread(
            ThreadId(request.thread_id), request.actor, origin=request.origin
        )
