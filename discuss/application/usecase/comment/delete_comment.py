"""Delete (tombstone) comment use case."""

from uuid import UUID

from pydantic import BaseModel

from discuss.application.usecase.comment.create_comment import CommentResponse
from discuss.application.usecase.views import CommentItem
from discuss.domain.service import CommentService
from discuss.domain.value import Actor, CommentId, RequestOrigin, ThreadId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    thread_id: UUID
    comment_id: UUID
    actor: Actor
    origin: RequestOrigin | None = None


class DeleteCommentUseCase:
    """Use case for soft-deleting a comment.

    The comment stays in place as a tombstone so replies keep their parent.
    """

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> CommentResponse:
        result = await self.comment_service.soft_delete_comment(
            ThreadId(request.thread_id),
            CommentId(request.comment_id),
            request.actor,
            origin=request.origin,
        )
        return CommentResponse(
            thread_id=str(request.thread_id),
            comment=CommentItem.from_model(result.comment, request.actor.user_id),
            counter_synced=result.counter_synced,
        )
