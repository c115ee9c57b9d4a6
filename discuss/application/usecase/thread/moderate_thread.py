"""Pin and lock toggles."""

from uuid import UUID

from pydantic import BaseModel

from discuss.domain.service import ThreadService
from discuss.domain.value import Actor, ThreadId


class ModerateThreadRequest(BaseModel):
    """Pin/lock toggle request."""

    thread_id: UUID
    actor: Actor


class TogglePinResponse(BaseModel):
    thread_id: str
    is_pinned: bool


class ToggleLockResponse(BaseModel):
    thread_id: str
    is_locked: bool


class TogglePinUseCase:
    """Use case for pinning/unpinning a thread."""

    def __init__(self, thread_service: ThreadService) -> None:
        self.thread_service = thread_service

    async def execute(self, request: ModerateThreadRequest) -> TogglePinResponse:
        pinned = await self.thread_service.toggle_pin(
            ThreadId(request.thread_id), request.actor
        )
        return TogglePinResponse(thread_id=str(request.thread_id), is_pinned=pinned)


class ToggleLockUseCase:
    """Use case for locking/unlocking a thread.

    Locked threads reject new comments from everyone.
    """

    def __init__(self, thread_service: ThreadService) -> None:
        self.thread_service = thread_service

    async def execute(self, request: ModerateThreadRequest) -> ToggleLockResponse:
        locked = await self.thread_service.toggle_lock(
            ThreadId(request.thread_id), request.actor
        )
        return ToggleLockResponse(thread_id=str(request.thread_id), is_locked=locked)
