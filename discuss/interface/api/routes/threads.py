"""Thread routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query, Request, status
from pydantic import BaseModel, Field

from discuss.application.usecase.thread import (
    CreateThreadRequest,
    CreateThreadResponse,
    CreateThreadUseCase,
    DeleteThreadRequest,
    DeleteThreadUseCase,
    GetThreadRequest,
    GetThreadResponse,
    GetThreadUseCase,
    ListThreadsRequest,
    ListThreadsResponse,
    ListThreadsUseCase,
    ModerateThreadRequest,
    ToggleLockResponse,
    ToggleLockUseCase,
    TogglePinResponse,
    TogglePinUseCase,
    UpdateThreadRequest,
    UpdateThreadResponse,
    UpdateThreadUseCase,
)
from discuss.domain.service import JWTService
from discuss.domain.value import ThreadSort
from discuss.interface.api.security import read_token, request_origin, require_actor

router = APIRouter(prefix="/threads", tags=["threads"], route_class=DishkaRoute)


class CreateThreadAPIRequest(BaseModel):
    """API request for creating a thread."""

    title: str = Field(min_length=5, max_length=500)
    body: str = Field(min_length=10, max_length=50000)
    category_id: UUID
    tags: list[str] = Field(default_factory=list, max_length=10)


class UpdateThreadAPIRequest(BaseModel):
    """API request for editing a thread. Omitted fields are unchanged."""

    title: str | None = Field(default=None, min_length=5, max_length=500)
    body: str | None = Field(default=None, min_length=10, max_length=50000)
    tags: list[str] | None = Field(default=None, max_length=10)


@router.get("", response_model=ListThreadsResponse)
async def list_threads(
    list_threads_use_case: FromDishka[ListThreadsUseCase],
    category_id: UUID | None = None,
    search: str | None = Query(default=None, max_length=200),
    sort: ThreadSort = ThreadSort.ACTIVITY,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
) -> ListThreadsResponse:
    """List threads, pinned first.

    Args:
        list_threads_use_case: List threads use case from DI
        category_id: Only threads in this category
        search: Case-insensitive title substring
        sort: activity (default), newest, popular or replies
        page: 1-based page number
        limit: Page size

    Returns:
        One page of threads with totals
    """
    return await list_threads_use_case.execute(
        ListThreadsRequest(
            category_id=category_id,
            search=search,
            sort=sort,
            page=page,
            limit=limit,
        )
    )


@router.post("", response_model=CreateThreadResponse, status_code=status.HTTP_201_CREATED)
async def create_thread(
    request: CreateThreadAPIRequest,
    http_request: Request,
    create_thread_use_case: FromDishka[CreateThreadUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(read_token),
) -> CreateThreadResponse:
    """Create a thread.

    Requires authentication. Either both the metadata row and the content
    document are stored, or neither is.

    Args:
        request: Thread creation data
        http_request: Raw request, for the activity log origin
        create_thread_use_case: Create thread use case from DI
        jwt_service: JWT service for token verification (injected)
        token: Identity token from header or cookie

    Returns:
        Created thread metadata
    """
    actor = require_actor(jwt_service, token, "create threads")
    return await create_thread_use_case.execute(
        CreateThreadRequest(
            title=request.title,
            body=request.body,
            category_id=request.category_id,
            tags=request.tags,
            author_id=actor.user_id,
            origin=request_origin(http_request),
        )
    )


@router.get("/{slug}", response_model=GetThreadResponse)
async def get_thread(
    slug: str,
    get_thread_use_case: FromDishka[GetThreadUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(read_token),
) -> GetThreadResponse:
    """Read a thread with its original post and comments.

    Authentication is optional; when present, upvote flags reflect the viewer.
    """
    viewer = jwt_service.get_actor_from_token(token)
    return await get_thread_use_case.execute(
        GetThreadRequest(slug=slug, viewer_id=viewer.user_id if viewer else None)
    )


@router.patch("/{thread_id}", response_model=UpdateThreadResponse)
async def update_thread(
    thread_id: UUID,
    request: UpdateThreadAPIRequest,
    http_request: Request,
    update_thread_use_case: FromDishka[UpdateThreadUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(read_token),
) -> UpdateThreadResponse:
    """Edit a thread's title, body or tags.

    Only the author or a moderator can edit.
    """
    actor = require_actor(jwt_service, token, "edit threads")
    return await update_thread_use_case.execute(
        UpdateThreadRequest(
            thread_id=thread_id,
            actor=actor,
            title=request.title,
            body=request.body,
            tags=request.tags,
            origin=request_origin(http_request),
        )
    )


@router.delete("/{thread_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_thread(
    thread_id: UUID,
    http_request: Request,
    delete_thread_use_case: FromDishka[DeleteThreadUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(read_token),
) -> None:
    """Delete a thread and its content. Moderators only."""
    actor = require_actor(jwt_service, token, "delete threads")
    await delete_thread_use_case.execute(
        DeleteThreadRequest(
            thread_id=thread_id, actor=actor, origin=request_origin(http_request)
        )
    )


@router.patch("/{thread_id}/pin", response_model=TogglePinResponse)
async def toggle_pin(
    thread_id: UUID,
    toggle_pin_use_case: FromDishka[TogglePinUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(read_token),
) -> TogglePinResponse:
    """Pin or unpin a thread. Moderators only."""
    actor = require_actor(jwt_service, token, "pin threads")
    return await toggle_pin_use_case.execute(
        ModerateThreadRequest(thread_id=thread_id, actor=actor)
    )


@router.patch("/{thread_id}/lock", response_model=ToggleLockResponse)
async def toggle_lock(
    thread_id: UUID,
    toggle_lock_use_case: FromDishka[ToggleLockUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(read_token),
) -> ToggleLockResponse:
    """Lock or unlock a thread. Moderators only."""
    actor = require_actor(jwt_service, token, "lock threads")
    return await toggle_lock_use_case.execute(
        ModerateThreadRequest(thread_id=thread_id, actor=actor)
    )
