"""Strongly typed identifiers for discussion entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Relational store identifiers
UserId = NewType("UserId", UUID)
CategoryId = NewType("CategoryId", UUID)
ThreadId = NewType("ThreadId", UUID)

# Document store identifiers
CommentId = NewType("CommentId", UUID)
