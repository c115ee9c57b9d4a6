"""Test configuration and helpers."""

from uuid import uuid4

from discuss.domain.model import Category, ThreadMetadata
from discuss.domain.repository import CategoryRepository
from discuss.domain.service import ThreadCreationSaga
from discuss.domain.value import (
    Actor,
    CategoryId,
    CategoryStatus,
    Role,
    Slug,
    UserId,
)


def make_actor(role: Role = Role.USER) -> Actor:
    """Actor with a fresh user id."""
    return Actor(user_id=UserId(uuid4()), role=role)


async def seed_category(
    category_repo: CategoryRepository,
    name: str = "General",
    status: CategoryStatus = CategoryStatus.ACTIVE,
) -> Category:
    """Store a category directly, bypassing the admin check."""
    return await category_repo.create(
        Category(
            id=CategoryId(uuid4()),
            name=name,
            slug=Slug(name.lower().replace(" ", "-")),
            status=status,
        )
    )


async def seed_thread(
    saga: ThreadCreationSaga,
    category: Category,
    author: Actor | None = None,
    title: str = "Reproducing the 2019 results",
    body: str = "Has anyone managed to reproduce these numbers?",
    tags: list[str] | None = None,
) -> ThreadMetadata:
    """Create a thread through the saga so both halves exist."""
    author = author or make_actor()
    return await saga.create_thread(
        title=title,
        body=body,
        category_id=category.id,
        author_id=author.user_id,
        tags=tags,
    )
