"""Repository interfaces for the discussion domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from discuss.domain.repository.activity import ActivityRepository
from discuss.domain.repository.category import CategoryRepository
from discuss.domain.repository.content import ContentRepository
from discuss.domain.repository.thread import ThreadRepository, ThreadTransaction

__all__ = [
    "ActivityRepository",
    "CategoryRepository",
    "ContentRepository",
    "ThreadRepository",
    "ThreadTransaction",
]
