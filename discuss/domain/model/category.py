"""Category entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from discuss.domain.model.common import DomainModel, utc_now
from discuss.domain.value import CategoryId, CategoryStatus, Slug, UserId


class Category(DomainModel):
    """Discussion category.

    Only active categories accept new threads.
    """

    id: CategoryId
    name: str = Field(min_length=1, max_length=100)
    slug: Slug
    description: Optional[str] = None
    status: CategoryStatus = CategoryStatus.ACTIVE
    created_by: Optional[UserId] = None
    created_at: datetime = Field(default_factory=utc_now)
    thread_count: int = Field(default=0, ge=0)  # Only populated by listings

    @property
    def is_active(self) -> bool:
        return self.status == CategoryStatus.ACTIVE
