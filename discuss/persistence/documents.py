"""Beanie document definitions for the content store.

A thread's content is one document: the original post plus every comment,
embedded, so that each comment mutation is a single-document atomic update.
"""

from datetime import datetime
from typing import Annotated, Any, Optional
from uuid import UUID

import logfire
from beanie import Document, Indexed, init_beanie
from motor.motor_asyncio import AsyncIOMotorClient
from pydantic import BaseModel, Field
from pymongo import ASCENDING, DESCENDING, IndexModel
from pymongo.errors import OperationFailure

from discuss.config import Settings
from discuss.domain.model.common import utc_now

ACTIVITY_TTL_INDEX = "activity_created_at_ttl"

# Server error code for "index exists with different options"
_INDEX_OPTIONS_CONFLICT = 85


class OriginalPostEmbed(BaseModel):
    author_id: UUID
    body: str
    is_edited: bool = False
    edited_at: Optional[datetime] = None
    upvotes: int = 0
    upvoted_by: list[UUID] = Field(default_factory=list)


class CommentEmbed(BaseModel):
    id: UUID
    author_id: UUID
    body: str
    parent_comment_id: Optional[UUID] = None
    is_edited: bool = False
    edited_at: Optional[datetime] = None
    is_deleted: bool = False
    deleted_at: Optional[datetime] = None
    upvotes: int = 0
    upvoted_by: list[UUID] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class ThreadContentDocument(Document):
    """Content of one thread, in the 'thread_contents' collection."""

    thread_id: Annotated[UUID, Indexed(unique=True)]
    original_post: OriginalPostEmbed
    comments: list[CommentEmbed] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    class Settings:
        name = "thread_contents"
        indexes = [
            "tags",
            "original_post.author_id",
            "comments.author_id",
        ]


class ActivityLogDocument(Document):
    """Audit entry in the 'activity_logs' collection.

    Expiry is driven by a TTL index on created_at, created by init_documents
    because its lifetime comes from settings.
    """

    actor_id: Optional[UUID] = None
    action: str
    resource: Optional[str] = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)

    class Settings:
        name = "activity_logs"
        indexes = [
            IndexModel([("actor_id", ASCENDING), ("created_at", DESCENDING)]),
            IndexModel([("action", ASCENDING), ("created_at", DESCENDING)]),
        ]


DOCUMENT_MODELS = [ThreadContentDocument, ActivityLogDocument]


def create_client(settings: Settings) -> AsyncIOMotorClient:
    """Create the content store client.

    Args:
        settings: Application settings with document store URL and timeouts

    Returns:
        Motor client (connects lazily)
    """
    docs = settings.documents
    return AsyncIOMotorClient(
        docs.url,
        serverSelectionTimeoutMS=docs.server_selection_timeout_ms,
        socketTimeoutMS=docs.socket_timeout_ms,
        uuidRepresentation="standard",
        tz_aware=True,
    )


async def init_documents(client: AsyncIOMotorClient, settings: Settings) -> None:
    """Register document models and ensure the activity TTL index.

    An existing TTL index with a different lifetime is adjusted in place.

    Args:
        client: Motor client
        settings: Application settings
    """
    database = client[settings.documents.database]
    with logfire.span("documents.init", database=settings.documents.database):
        await init_beanie(database=database, document_models=DOCUMENT_MODELS)

        ttl_seconds = settings.activity.retention_days * 86400
        collection = ActivityLogDocument.get_motor_collection()
        try:
            await collection.create_index(
                "created_at", name=ACTIVITY_TTL_INDEX, expireAfterSeconds=ttl_seconds
            )
        except OperationFailure as e:
            if e.code != _INDEX_OPTIONS_CONFLICT:
                raise
            logfire.info("Updating activity TTL", expire_after_seconds=ttl_seconds)
            await database.command(
                "collMod",
                ActivityLogDocument.Settings.name,
                index={"name": ACTIVITY_TTL_INDEX, "expireAfterSeconds": ttl_seconds},
            )
