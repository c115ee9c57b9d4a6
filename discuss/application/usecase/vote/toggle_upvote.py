"""Toggle upvote use case."""

from uuid import UUID

from pydantic import BaseModel

from discuss.domain.service import VoteService
from discuss.domain.value import (
    CommentId,
    RequestOrigin,
    ThreadId,
    UserId,
    VoteTarget,
)


class ToggleUpvoteRequest(BaseModel):
    """Toggle upvote request."""

    target: VoteTarget
    thread_id: UUID
    comment_id: UUID | None = None  # Required for comment targets
    voter_id: UUID  # From the authenticated user
    origin: RequestOrigin | None = None


class ToggleUpvoteResponse(BaseModel):
    """Toggle upvote response."""

    upvotes: int
    has_upvoted: bool


class ToggleUpvoteUseCase:
    """Use case for toggling an upvote on a thread's post or a comment.

    Calling it twice with the same voter restores the original state.
    """

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize toggle upvote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: ToggleUpvoteRequest) -> ToggleUpvoteResponse:
        """Execute toggle upvote flow.

        Raises:
            NotFoundError: If the target is missing or deleted
        """
        state = await self.vote_service.toggle_upvote(
            request.target,
            ThreadId(request.thread_id),
            UserId(request.voter_id),
            comment_id=CommentId(request.comment_id) if request.comment_id else None,
            origin=request.origin,
        )
        return ToggleUpvoteResponse(upvotes=state.count, has_upvoted=state.voted)
