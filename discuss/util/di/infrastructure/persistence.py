"""Persistence infrastructure providers.

Two mockable components: "metadata" (PostgreSQL) and "content" (MongoDB).
"""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from motor.motor_asyncio import AsyncIOMotorClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from discuss.config import Settings
from discuss.domain.repository import (
    ActivityRepository,
    CategoryRepository,
    ContentRepository,
    ThreadRepository,
)
from discuss.persistence.database import create_engine, create_session_factory
from discuss.persistence.documents import create_client, init_documents
from discuss.persistence.repository import (
    MongoActivityRepository,
    MongoContentRepository,
    PostgresCategoryRepository,
    PostgresThreadRepository,
)
from discuss.util.di.base import ProviderBase
from discuss.util.observability import instrument_pymongo, instrument_sqlalchemy


class MetadataProvider(ProviderBase):
    """Metadata store component base."""

    __mock_component__ = "metadata"


class ProdMetadataProvider(MetadataProvider):
    """Production metadata provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed on container close."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide the read session for request scope.

        Writes never go through this session (repositories open their own
        transactions), so it only has to be released.
        """
        async with session_factory() as session:
            try:
                yield session
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_thread_repository(
        self,
        session: AsyncSession,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> ThreadRepository:
        """Provide Thread repository."""
        return PostgresThreadRepository(session, session_factory)

    @provide(scope=Scope.REQUEST)
    def get_category_repository(
        self,
        session: AsyncSession,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> CategoryRepository:
        """Provide Category repository."""
        return PostgresCategoryRepository(session, session_factory)


class ContentProvider(ProviderBase):
    """Content store component base."""

    __mock_component__ = "content"


class ProdContentProvider(ContentProvider):
    """Production content provider using MongoDB through beanie."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_client(self, settings: Settings) -> AsyncIterator[AsyncIOMotorClient]:
        """Provide the motor client with beanie initialized on it."""
        instrument_pymongo()
        client = create_client(settings)
        await init_documents(client, settings)
        yield client
        client.close()

    # Repositories take the client only to make sure beanie is initialized
    # before any document query runs.

    @provide(scope=Scope.REQUEST)
    def get_content_repository(self, client: AsyncIOMotorClient) -> ContentRepository:
        """Provide Content repository."""
        return MongoContentRepository()

    @provide(scope=Scope.APP)
    def get_activity_repository(
        self, client: AsyncIOMotorClient
    ) -> ActivityRepository:
        """Provide Activity repository."""
        return MongoActivityRepository()
