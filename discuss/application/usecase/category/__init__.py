"""Category use cases."""

from .create_category import CreateCategoryRequest, CreateCategoryUseCase
from .get_category import GetCategoryRequest, GetCategoryUseCase
from .list_categories import ListCategoriesResponse, ListCategoriesUseCase
from .update_category import UpdateCategoryRequest, UpdateCategoryUseCase

__all__ = [
    "CreateCategoryRequest",
    "CreateCategoryUseCase",
    "GetCategoryRequest",
    "GetCategoryUseCase",
    "ListCategoriesResponse",
    "ListCategoriesUseCase",
    "UpdateCategoryRequest",
    "UpdateCategoryUseCase",
]
