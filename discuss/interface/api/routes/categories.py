"""Category routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, Field

from discuss.application.usecase.category import (
    CreateCategoryRequest,
    CreateCategoryUseCase,
    GetCategoryRequest,
    GetCategoryUseCase,
    ListCategoriesResponse,
    ListCategoriesUseCase,
    UpdateCategoryRequest,
    UpdateCategoryUseCase,
)
from discuss.application.usecase.views import CategoryItem
from discuss.domain.service import JWTService
from discuss.domain.value import CategoryStatus
from discuss.interface.api.security import read_token, request_origin, require_actor

router = APIRouter(prefix="/categories", tags=["categories"], route_class=DishkaRoute)


class CreateCategoryAPIRequest(BaseModel):
    """API request for creating a category."""

    name: str = Field(min_length=2, max_length=100)
    description: str | None = Field(default=None, max_length=1000)


class UpdateCategoryAPIRequest(BaseModel):
    """API request for updating a category. Omitted fields are unchanged."""

    name: str | None = Field(default=None, min_length=2, max_length=100)
    description: str | None = Field(default=None, max_length=1000)
    status: CategoryStatus | None = None


@router.get("", response_model=ListCategoriesResponse)
async def list_categories(
    list_categories_use_case: FromDishka[ListCategoriesUseCase],
) -> ListCategoriesResponse:
    """List active categories with their thread counts."""
    return await list_categories_use_case.execute()


@router.get("/{slug}", response_model=CategoryItem)
async def get_category(
    slug: str,
    get_category_use_case: FromDishka[GetCategoryUseCase],
) -> CategoryItem:
    """Get a category by slug."""
    return await get_category_use_case.execute(GetCategoryRequest(slug=slug))


@router.post("", response_model=CategoryItem, status_code=status.HTTP_201_CREATED)
async def create_category(
    request: CreateCategoryAPIRequest,
    http_request: Request,
    create_category_use_case: FromDishka[CreateCategoryUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(read_token),
) -> CategoryItem:
    """Create a category. Admins only.

    Args:
        request: Category data
        http_request: Raw request, for the activity log origin
        create_category_use_case: Create category use case from DI
        jwt_service: JWT service for token verification (injected)
        token: Identity token from header or cookie

    Returns:
        The new category
    """
    actor = require_actor(jwt_service, token, "create categories")
    return await create_category_use_case.execute(
        CreateCategoryRequest(
            name=request.name,
            description=request.description,
            actor=actor,
            origin=request_origin(http_request),
        )
    )


@router.patch("/{category_id}", response_model=CategoryItem)
async def update_category(
    category_id: UUID,
    request: UpdateCategoryAPIRequest,
    http_request: Request,
    update_category_use_case: FromDishka[UpdateCategoryUseCase],
    jwt_service: FromDishka[JWTService],
    token: str | None = Depends(read_token),
) -> CategoryItem:
    """Rename, describe or archive a category. Admins only."""
    actor = require_actor(jwt_service, token, "update categories")
    return await update_category_use_case.execute(
        UpdateCategoryRequest(
            category_id=category_id,
            actor=actor,
            name=request.name,
            description=request.description,
            status=request.status,
            origin=request_origin(http_request),
        )
    )
