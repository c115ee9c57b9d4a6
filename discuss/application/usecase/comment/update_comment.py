"""Update comment use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from discuss.application.usecase.comment.create_comment import CommentResponse
from discuss.application.usecase.views import CommentItem
from discuss.domain.service import CommentService
from discuss.domain.value import Actor, CommentId, RequestOrigin, ThreadId


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    thread_id: UUID
    comment_id: UUID
    body: str
    actor: Actor
    origin: RequestOrigin | None = None


class UpdateCommentUseCase:
    """Use case for editing a live comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> CommentResponse:
        """Execute update comment flow.

        Raises:
            NotFoundError: If the comment is missing or deleted
            ForbiddenError: If the actor is neither author nor moderator
        """
        with logfire.span(
            "update_comment.execute",
            comment_id=str(request.comment_id),
            body_length=len(request.body),
        ):
            result = await self.comment_service.edit_comment(
                ThreadId(request.thread_id),
                CommentId(request.comment_id),
                request.actor,
                request.body,
                origin=request.origin,
            )
            return CommentResponse(
                thread_id=str(request.thread_id),
                comment=CommentItem.from_model(result.comment, request.actor.user_id),
                counter_synced=result.counter_synced,
            )
