"""In-memory repository implementations for testing."""

from .activity import InMemoryActivityRepository
from .category import InMemoryCategoryRepository
from .content import InMemoryContentRepository
from .thread import InMemoryThreadRepository, InMemoryThreadTransaction

__all__ = [
    "InMemoryActivityRepository",
    "InMemoryCategoryRepository",
    "InMemoryContentRepository",
    "InMemoryThreadRepository",
    "InMemoryThreadTransaction",
]
