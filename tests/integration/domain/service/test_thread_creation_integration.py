"""Integration tests for thread creation across both stores."""

from uuid import uuid4

import pytest

from discuss.domain.repository import (
    CategoryRepository,
    ContentRepository,
    ThreadRepository,
)
from discuss.domain.service import (
    CommentService,
    ReplyCounterSynchronizer,
    ThreadCreationSaga,
)
from tests.conftest import make_actor, seed_category, seed_thread
from tests.harness import create_env_fixture

# Integration test fixture - real PostgreSQL and MongoDB
integration_env = create_env_fixture(unmock={"metadata", "content"})


class TestThreadCreationIntegration:
    @pytest.mark.asyncio
    async def test_creates_both_halves(self, integration_env):
        """The committed row and its content document share the thread id."""
        # Arrange
        saga = await integration_env.get(ThreadCreationSaga)
        category = await seed_category(
            await integration_env.get(CategoryRepository),
            name=f"Integration {uuid4().hex[:8]}",
        )

        # Act
        thread = await seed_thread(saga, category, tags=["Optics", "optics"])

        # Assert
        metadata = await (await integration_env.get(ThreadRepository)).find_by_id(
            thread.id
        )
        content = await (await integration_env.get(ContentRepository)).find_by_thread(
            thread.id
        )
        assert metadata is not None
        assert metadata.reply_count == 0
        assert content is not None
        assert content.thread_id == thread.id
        assert content.comments == []

    @pytest.mark.asyncio
    async def test_comments_keep_counter_in_step(self, integration_env):
        # Arrange
        saga = await integration_env.get(ThreadCreationSaga)
        comment_service = await integration_env.get(CommentService)
        reply_counter = await integration_env.get(ReplyCounterSynchronizer)
        category = await seed_category(
            await integration_env.get(CategoryRepository),
            name=f"Integration {uuid4().hex[:8]}",
        )
        thread = await seed_thread(saga, category)
        author = make_actor()

        # Act
        kept = await comment_service.add_comment(thread.id, author, "Kept")
        removed = await comment_service.add_comment(thread.id, author, "Removed")
        await comment_service.soft_delete_comment(
            thread.id, removed.comment.id, author
        )
        outcome = await reply_counter.reconcile(thread.id)

        # Assert
        metadata = await (await integration_env.get(ThreadRepository)).find_by_id(
            thread.id
        )
        assert kept.comment.body == "Kept"
        assert kept.counter_synced is True
        assert metadata.reply_count == 1
        assert outcome.drifted is False
