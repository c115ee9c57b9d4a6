"""Create category use case."""

from pydantic import BaseModel

from discuss.application.usecase.views import CategoryItem
from discuss.domain.service import CategoryService
from discuss.domain.value import Actor, RequestOrigin


class CreateCategoryRequest(BaseModel):
    """Create category request."""

    name: str
    description: str | None = None
    actor: Actor
    origin: RequestOrigin | None = None


class CreateCategoryUseCase:
    """Use case for creating a category (admins only)."""

    def __init__(self, category_service: CategoryService) -> None:
        """Initialize create category use case.

        Args:
            category_service: Category domain service
        """
        self.category_service = category_service

    async def execute(self, request: CreateCategoryRequest) -> CategoryItem:
        """Execute create category flow.

        Raises:
            ForbiddenError: If the actor is not an admin
            ConflictError: If the name is taken
        """
        category = await self.category_service.create_category(
            request.name,
            request.actor,
            description=request.description,
            origin=request.origin,
        )
        return CategoryItem.from_model(category)
