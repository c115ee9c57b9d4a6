"""Get category use case."""

from pydantic import BaseModel

from discuss.application.usecase.views import CategoryItem
from discuss.domain.service import CategoryService


class GetCategoryRequest(BaseModel):
    """Get category request."""

    slug: str


class GetCategoryUseCase:
    """Use case for looking up a category by slug."""

    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(self, request: GetCategoryRequest) -> CategoryItem:
        """Raises NotFoundError if no category has the slug."""
        category = await self.category_service.get_category(request.slug)
        return CategoryItem.from_model(category)
