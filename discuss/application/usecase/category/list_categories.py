"""List categories use case."""

from pydantic import BaseModel

from discuss.application.usecase.views import CategoryItem
from discuss.domain.service import CategoryService


class ListCategoriesResponse(BaseModel):
    """List categories response."""

    categories: list[CategoryItem]


class ListCategoriesUseCase:
    """Use case for listing active categories with thread counts."""

    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(self) -> ListCategoriesResponse:
        categories = await self.category_service.list_categories()
        return ListCategoriesResponse(
            categories=[CategoryItem.from_model(c) for c in categories]
        )
