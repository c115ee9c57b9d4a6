"""Integration tests for PostgresThreadRepository."""

from uuid import uuid4

import pytest

from discuss.domain.model import Category, NewThread, ThreadMetadata
from discuss.domain.model.common import utc_now
from discuss.domain.repository import CategoryRepository, ThreadRepository
from discuss.domain.value import Slug, UserId
from discuss.persistence.repository import PostgresThreadRepository
from tests.conftest import seed_category
from tests.harness import create_env_fixture

# Integration test fixture - real PostgreSQL, content in memory
integration_env = create_env_fixture(unmock={"metadata"})


async def new_category(integration_env) -> Category:
    return await seed_category(
        await integration_env.get(CategoryRepository),
        name=f"Integration {uuid4().hex[:8]}",
    )


async def insert_thread(
    thread_repo: ThreadRepository, category: Category
) -> ThreadMetadata:
    async with thread_repo.begin() as tx:
        thread = await tx.insert(
            NewThread(
                title="Integration thread",
                slug=Slug(f"integration-{uuid4().hex[:12]}"),
                category_id=category.id,
                author_id=UserId(uuid4()),
            )
        )
        await tx.commit()
    return thread


class TestPostgresThreadRepositoryIntegration:
    """Integration tests for the metadata store adapter."""

    @pytest.mark.asyncio
    async def test_uses_postgres_adapter(self, integration_env):
        thread_repo = await integration_env.get(ThreadRepository)
        assert isinstance(thread_repo, PostgresThreadRepository)

    @pytest.mark.asyncio
    async def test_committed_insert_is_visible(self, integration_env):
        # Arrange
        thread_repo = await integration_env.get(ThreadRepository)
        category = await new_category(integration_env)

        # Act
        thread = await insert_thread(thread_repo, category)

        # Assert
        found = await thread_repo.find_by_id(thread.id)
        assert found is not None
        assert found.slug == thread.slug
        assert found.reply_count == 0
        assert found.created_at is not None

    @pytest.mark.asyncio
    async def test_uncommitted_insert_is_discarded(self, integration_env):
        """Leaving the transaction scope without commit rolls the row back."""
        # Arrange
        thread_repo = await integration_env.get(ThreadRepository)
        category = await new_category(integration_env)

        # Act
        async with thread_repo.begin() as tx:
            thread = await tx.insert(
                NewThread(
                    title="Never committed",
                    slug=Slug(f"integration-{uuid4().hex[:12]}"),
                    category_id=category.id,
                    author_id=UserId(uuid4()),
                )
            )

        # Assert
        assert await thread_repo.find_by_id(thread.id) is None

    @pytest.mark.asyncio
    async def test_decrement_is_floored_at_zero(self, integration_env):
        # Arrange
        thread_repo = await integration_env.get(ThreadRepository)
        thread = await insert_thread(thread_repo, await new_category(integration_env))

        # Act
        found_row = await thread_repo.decrement_reply_count(thread.id)

        # Assert
        assert found_row is True
        stored = await thread_repo.find_by_id(thread.id)
        assert stored.reply_count == 0

    @pytest.mark.asyncio
    async def test_increment_records_last_reply(self, integration_env):
        # Arrange
        thread_repo = await integration_env.get(ThreadRepository)
        thread = await insert_thread(thread_repo, await new_category(integration_env))
        replier = UserId(uuid4())

        # Act
        await thread_repo.increment_reply_count(thread.id, replier, utc_now())
        await thread_repo.increment_reply_count(thread.id, replier, utc_now())
        await thread_repo.decrement_reply_count(thread.id)

        # Assert
        stored = await thread_repo.find_by_id(thread.id)
        assert stored.reply_count == 1
        assert stored.last_reply_by == replier
        assert stored.last_reply_at is not None

    @pytest.mark.asyncio
    async def test_counter_writes_on_missing_thread(self, integration_env):
        # Arrange
        thread_repo = await integration_env.get(ThreadRepository)
        thread = await insert_thread(thread_repo, await new_category(integration_env))
        await thread_repo.delete(thread.id)

        # Act & Assert
        assert await thread_repo.decrement_reply_count(thread.id) is False
        assert await thread_repo.set_reply_count(thread.id, 3) is False

    @pytest.mark.asyncio
    async def test_set_reply_count_checks_expected(self, integration_env):
        """A stale expected value leaves the stored count alone."""
        # Arrange
        thread_repo = await integration_env.get(ThreadRepository)
        thread = await insert_thread(thread_repo, await new_category(integration_env))
        await thread_repo.increment_reply_count(thread.id, UserId(uuid4()), utc_now())

        # Act
        stale = await thread_repo.set_reply_count(thread.id, 5, expected=0)
        current = await thread_repo.set_reply_count(thread.id, 4, expected=1)

        # Assert
        assert stale is False
        assert current is True
        stored = await thread_repo.find_by_id(thread.id)
        assert stored.reply_count == 4

    @pytest.mark.asyncio
    async def test_toggles_flip_flags(self, integration_env):
        # Arrange
        thread_repo = await integration_env.get(ThreadRepository)
        thread = await insert_thread(thread_repo, await new_category(integration_env))

        # Act
        pinned = await thread_repo.toggle_pinned(thread.id)
        unpinned = await thread_repo.toggle_pinned(thread.id)
        locked = await thread_repo.toggle_locked(thread.id)

        # Assert
        assert (pinned, unpinned, locked) == (True, False, True)

    @pytest.mark.asyncio
    async def test_totals_include_new_replies(self, integration_env):
        # Arrange
        thread_repo = await integration_env.get(ThreadRepository)
        thread = await insert_thread(thread_repo, await new_category(integration_env))
        await thread_repo.set_reply_count(thread.id, 3)

        # Act
        totals = await thread_repo.totals()

        # Assert
        assert totals.total >= 1
        assert totals.total_replies >= 3
