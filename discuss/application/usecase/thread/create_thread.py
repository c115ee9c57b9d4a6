"""Create thread use case."""

from uuid import UUID

from pydantic import BaseModel

from discuss.application.usecase.views import ThreadItem
from discuss.domain.service import ThreadCreationSaga
from discuss.domain.value import CategoryId, RequestOrigin, UserId


class CreateThreadRequest(BaseModel):
    """Create thread request."""

    title: str
    body: str
    category_id: UUID
    tags: list[str] = []
    author_id: UUID  # From the authenticated actor
    origin: RequestOrigin | None = None


class CreateThreadResponse(BaseModel):
    """Create thread response."""

    thread: ThreadItem


class CreateThreadUseCase:
    """Use case for creating a thread (metadata and content together)."""

    def __init__(self, saga: ThreadCreationSaga) -> None:
        """Initialize create thread use case.

        Args:
            saga: Thread creation saga
        """
        self.saga = saga

    async def execute(self, request: CreateThreadRequest) -> CreateThreadResponse:
        """Execute create thread flow.

        Args:
            request: Create thread request

        Returns:
            The created thread's metadata

        Raises:
            NotFoundError: If the category is missing or archived
            ConflictError: If the generated slug collides
            StoreUnavailableError: If a store fails (nothing is left behind)
        """
        thread = await self.saga.create_thread(
            title=request.title,
            body=request.body,
            category_id=CategoryId(request.category_id),
            author_id=UserId(request.author_id),
            tags=request.tags,
            origin=request.origin,
        )
        return CreateThreadResponse(thread=ThreadItem.from_model(thread))
