"""Store-backed repository implementations."""

from discuss.persistence.repository.activity import MongoActivityRepository
from discuss.persistence.repository.category import PostgresCategoryRepository
from discuss.persistence.repository.content import MongoContentRepository
from discuss.persistence.repository.thread import (
    PostgresThreadRepository,
    PostgresThreadTransaction,
)

__all__ = [
    "MongoActivityRepository",
    "MongoContentRepository",
    "PostgresCategoryRepository",
    "PostgresThreadRepository",
    "PostgresThreadTransaction",
]
