"""Comment routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, Field

from discuss.application.usecase.comment import (
    CommentResponse,
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from discuss.domain.service import JWTService
from discuss.interface.api.security import read_token, request_origin, require_actor

router = APIRouter(prefix="/threads", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    body: str = Field(min_length=1, max_length=5000)
    parent_comment_id: UUID | None = None  # Comment being replied to


class UpdateCommentAPIRequest(BaseModel):
    """API request for editing a comment."""

    body: str = Field(min_length=1, max_length=5000)


@router.post(
    "/{thread_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    thread_id: UUID,
    request: CreateCommentAPIRequest,
    http_request: Request,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(read_token),
) -> CommentResponse:
    """Comment on a thread or reply to another comment.

    Requires authentication. A stored comment is always reported as created;
    ``counter_synced`` is false when the thread's reply count lagged behind.

    Args:
        thread_id: Thread UUID
        request: Comment creation data
        http_request: Raw request, for the activity log origin
        create_comment_use_case: Create comment use case from DI
        jwt_service: JWT service for token verification (injected)
        token: Identity token from header or cookie

    Returns:
        Created comment details
    """
    actor = require_actor(jwt_service, token, "create comments")
    return await create_comment_use_case.execute(
        CreateCommentRequest(
            thread_id=thread_id,
            body=request.body,
            actor=actor,
            parent_comment_id=request.parent_comment_id,
            origin=request_origin(http_request),
        )
    )


@router.patch("/{thread_id}/comments/{comment_id}", response_model=CommentResponse)
async def update_comment(
    thread_id: UUID,
    comment_id: UUID,
    request: UpdateCommentAPIRequest,
    http_request: Request,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(read_token),
) -> CommentResponse:
    """Edit a comment's body.

    Only the author or a moderator can edit. Deleted comments cannot be edited.
    """
    actor = require_actor(jwt_service, token, "edit comments")
    return await update_comment_use_case.execute(
        UpdateCommentRequest(
            thread_id=thread_id,
            comment_id=comment_id,
            body=request.body,
            actor=actor,
            origin=request_origin(http_request),
        )
    )


@router.delete("/{thread_id}/comments/{comment_id}", response_model=CommentResponse)
async def delete_comment(
    thread_id: UUID,
    comment_id: UUID,
    http_request: Request,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(read_token),
) -> CommentResponse:
    """Soft-delete a comment, leaving a tombstone in its place."""
    actor = require_actor(jwt_service, token, "delete comments")
    return await delete_comment_use_case.execute(
        DeleteCommentRequest(
            thread_id=thread_id,
            comment_id=comment_id,
            actor=actor,
            origin=request_origin(http_request),
        )
    )
