"""Update category use case."""

from uuid import UUID

from pydantic import BaseModel

from discuss.application.usecase.views import CategoryItem
from discuss.domain.service import CategoryService
from discuss.domain.value import Actor, CategoryId, CategoryStatus, RequestOrigin


class UpdateCategoryRequest(BaseModel):
    """Update category request. None fields are left unchanged."""

    category_id: UUID
    actor: Actor
    name: str | None = None
    description: str | None = None
    status: CategoryStatus | None = None
    origin: RequestOrigin | None = None


class UpdateCategoryUseCase:
    """Use case for renaming, describing or archiving a category."""

    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(self, request: UpdateCategoryRequest) -> CategoryItem:
        category = await self.category_service.update_category(
            CategoryId(request.category_id),
            request.actor,
            name=request.name,
            description=request.description,
            status=request.status,
            origin=request.origin,
        )
        return CategoryItem.from_model(category)
