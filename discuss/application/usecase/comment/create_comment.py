"""Create comment use case."""

from uuid import UUID

from pydantic import BaseModel

from discuss.application.usecase.views import CommentItem
from discuss.domain.service import CommentService
from discuss.domain.value import Actor, CommentId, RequestOrigin, ThreadId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    thread_id: UUID
    body: str
    actor: Actor  # From the authenticated user
    parent_comment_id: UUID | None = None  # Comment being replied to
    origin: RequestOrigin | None = None


class CommentResponse(BaseModel):
    """Comment write response.

    counter_synced is False when the comment was stored but the thread's
    reply count could not be updated.
    """

    thread_id: str
    comment: CommentItem
    counter_synced: bool


class CreateCommentUseCase:
    """Use case for commenting on a thread or replying to a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CommentResponse:
        """Execute create comment flow.

        Steps:
        1. Check the thread exists and is not locked
        2. Check the parent comment (if any) exists in the thread
        3. Append the comment, then bump the thread's reply counter

        Args:
            request: Create comment request

        Returns:
            Stored comment and counter sync flag

        Raises:
            NotFoundError: If the thread or parent is missing
            ForbiddenError: If the thread is locked
        """
        result = await self.comment_service.add_comment(
            ThreadId(request.thread_id),
            request.actor,
            request.body,
            parent_comment_id=(
                CommentId(request.parent_comment_id)
                if request.parent_comment_id
                else None
            ),
            origin=request.origin,
        )
        return CommentResponse(
            thread_id=str(request.thread_id),
            comment=CommentItem.from_model(result.comment, request.actor.user_id),
            counter_synced=result.counter_synced,
        )
