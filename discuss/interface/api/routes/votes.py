"""Vote routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Request

from discuss.application.usecase.vote import (
    ToggleUpvoteRequest,
    ToggleUpvoteResponse,
    ToggleUpvoteUseCase,
)
from discuss.domain.service import JWTService
from discuss.domain.value import VoteTarget
from discuss.interface.api.security import read_token, request_origin, require_actor

router = APIRouter(prefix="/threads", tags=["votes"], route_class=DishkaRoute)


@router.post("/{thread_id}/upvote", response_model=ToggleUpvoteResponse)
async def toggle_post_upvote(
    thread_id: UUID,
    http_request: Request,
    toggle_upvote_use_case: FromDishka[ToggleUpvoteUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(read_token),
) -> ToggleUpvoteResponse:
    """Toggle the caller's upvote on a thread's original post.

    Requires authentication.

    Args:
        thread_id: Thread UUID
        http_request: Raw request, for the activity log origin
        toggle_upvote_use_case: Toggle upvote use case from DI
        jwt_service: JWT service for token verification (injected)
        token: Identity token from header or cookie

    Returns:
        New upvote count and whether the caller now has an upvote
    """
    actor = require_actor(jwt_service, token, "vote")
    return await toggle_upvote_use_case.execute(
        ToggleUpvoteRequest(
            target=VoteTarget.POST,
            thread_id=thread_id,
            voter_id=actor.user_id,
            origin=request_origin(http_request),
        )
    )


@router.post(
    "/{thread_id}/comments/{comment_id}/upvote", response_model=ToggleUpvoteResponse
)
async def toggle_comment_upvote(
    thread_id: UUID,
    comment_id: UUID,
    http_request: Request,
    toggle_upvote_use_case: FromDishka[ToggleUpvoteUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(read_token),
) -> ToggleUpvoteResponse:
    """Toggle the caller's upvote on a comment. Deleted comments cannot be voted on."""
    actor = require_actor(jwt_service, token, "vote")
    return await toggle_upvote_use_case.execute(
        ToggleUpvoteRequest(
            target=VoteTarget.COMMENT,
            thread_id=thread_id,
            comment_id=comment_id,
            voter_id=actor.user_id,
            origin=request_origin(http_request),
        )
    )
