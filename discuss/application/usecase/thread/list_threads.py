"""List threads use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from discuss.application.usecase.views import ThreadItem
from discuss.domain.service import ThreadService
from discuss.domain.value import CategoryId, ThreadSort


class ListThreadsRequest(BaseModel):
    """List threads request."""

    category_id: UUID | None = None
    search: str | None = None
    sort: ThreadSort = ThreadSort.ACTIVITY
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)


class ListThreadsResponse(BaseModel):
    """List threads response."""

    threads: list[ThreadItem]
    total: int
    page: int
    limit: int
    pages: int


class ListThreadsUseCase:
    """Use case for listing threads with filtering and pagination."""

    def __init__(self, thread_service: ThreadService) -> None:
        """Initialize list threads use case.

        Args:
            thread_service: Thread domain service
        """
        self.thread_service = thread_service

    async def execute(self, request: ListThreadsRequest) -> ListThreadsResponse:
        """Execute list threads flow.

        Args:
            request: Filters, sort and pagination

        Returns:
            One page of threads, pinned first
        """
        with logfire.span(
            "list_threads.execute",
            sort=request.sort.value,
            page=request.page,
            limit=request.limit,
        ):
            page = await self.thread_service.list_threads(
                category_id=CategoryId(request.category_id)
                if request.category_id
                else None,
                search=request.search,
                sort=request.sort,
                page=request.page,
                limit=request.limit,
            )
            return ListThreadsResponse(
                threads=[ThreadItem.from_model(t) for t in page.threads],
                total=page.total,
                page=page.page,
                limit=page.limit,
                pages=page.pages,
            )
