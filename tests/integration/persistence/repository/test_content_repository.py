"""Integration tests for MongoContentRepository.

These tests run the conditional single-document updates against a real
MongoDB server, since vote and tombstone atomicity lives in those queries.
"""

from uuid import uuid4

import pytest

from discuss.domain.error import ConflictError
from discuss.domain.model import Comment, OriginalPost, ThreadContent
from discuss.domain.model.common import utc_now
from discuss.domain.repository import ContentRepository
from discuss.domain.value import CommentId, TagName, ThreadId, UserId
from discuss.persistence.repository import MongoContentRepository
from tests.harness import create_env_fixture

# Integration test fixture - real MongoDB, metadata in memory
integration_env = create_env_fixture(unmock={"content"})


async def new_content(content_repo: ContentRepository) -> ThreadContent:
    return await content_repo.create(
        ThreadContent(
            thread_id=ThreadId(uuid4()),
            original_post=OriginalPost(
                author_id=UserId(uuid4()), body="Opening post body"
            ),
            tags=[TagName("optics")],
        )
    )


async def new_comment(
    content_repo: ContentRepository, thread_id: ThreadId, body: str = "A comment"
) -> Comment:
    comment = await content_repo.push_comment(
        thread_id,
        Comment(id=CommentId(uuid4()), author_id=UserId(uuid4()), body=body),
    )
    assert comment is not None
    return comment


class TestMongoContentRepositoryIntegration:
    """Integration tests for the content store adapter."""

    @pytest.mark.asyncio
    async def test_uses_mongo_adapter(self, integration_env):
        content_repo = await integration_env.get(ContentRepository)
        assert isinstance(content_repo, MongoContentRepository)

    @pytest.mark.asyncio
    async def test_create_find_and_delete(self, integration_env):
        # Arrange
        content_repo = await integration_env.get(ContentRepository)
        content = await new_content(content_repo)

        # Act
        found = await content_repo.find_by_thread(content.thread_id)
        deleted = await content_repo.delete(content.thread_id)

        # Assert
        assert found is not None
        assert found.original_post.body == "Opening post body"
        assert found.tags == [TagName("optics")]
        assert deleted is True
        assert await content_repo.find_by_thread(content.thread_id) is None

    @pytest.mark.asyncio
    async def test_post_upvote_round_trip(self, integration_env):
        """Toggling twice restores the post, count and voters in step."""
        # Arrange
        content_repo = await integration_env.get(ContentRepository)
        content = await new_content(content_repo)
        voter = UserId(uuid4())

        # Act
        first = await content_repo.toggle_post_upvote(content.thread_id, voter)
        stored = await content_repo.find_by_thread(content.thread_id)
        second = await content_repo.toggle_post_upvote(content.thread_id, voter)
        restored = await content_repo.find_by_thread(content.thread_id)

        # Assert
        assert (first.count, first.voted) == (1, True)
        assert stored.original_post.upvoted_by == [voter]
        assert (second.count, second.voted) == (0, False)
        assert restored.original_post.upvotes == 0
        assert restored.original_post.upvoted_by == []

    @pytest.mark.asyncio
    async def test_post_upvotes_from_two_voters(self, integration_env):
        # Arrange
        content_repo = await integration_env.get(ContentRepository)
        content = await new_content(content_repo)

        # Act
        await content_repo.toggle_post_upvote(content.thread_id, UserId(uuid4()))
        state = await content_repo.toggle_post_upvote(content.thread_id, UserId(uuid4()))

        # Assert
        stored = await content_repo.find_by_thread(content.thread_id)
        assert state.count == 2
        assert stored.original_post.upvotes == len(stored.original_post.upvoted_by)

    @pytest.mark.asyncio
    async def test_post_upvote_on_missing_document(self, integration_env):
        content_repo = await integration_env.get(ContentRepository)

        state = await content_repo.toggle_post_upvote(
            ThreadId(uuid4()), UserId(uuid4())
        )

        assert state is None

    @pytest.mark.asyncio
    async def test_comment_upvote_round_trip(self, integration_env):
        """Only the targeted comment changes."""
        # Arrange
        content_repo = await integration_env.get(ContentRepository)
        content = await new_content(content_repo)
        target = await new_comment(content_repo, content.thread_id, "Target")
        other = await new_comment(content_repo, content.thread_id, "Other")
        voter = UserId(uuid4())

        # Act
        first = await content_repo.toggle_comment_upvote(
            content.thread_id, target.id, voter
        )
        stored = await content_repo.find_by_thread(content.thread_id)
        second = await content_repo.toggle_comment_upvote(
            content.thread_id, target.id, voter
        )

        # Assert
        assert (first.count, first.voted) == (1, True)
        assert stored.find_comment(target.id).upvoted_by == [voter]
        assert stored.find_comment(other.id).upvotes == 0
        assert (second.count, second.voted) == (0, False)

    @pytest.mark.asyncio
    async def test_edit_keeps_comment_position(self, integration_env):
        # Arrange
        content_repo = await integration_env.get(ContentRepository)
        content = await new_content(content_repo)
        first = await new_comment(content_repo, content.thread_id, "First")
        second = await new_comment(content_repo, content.thread_id, "Second")

        # Act
        edited = await content_repo.update_comment_body(
            content.thread_id, first.id, "First, edited", utc_now()
        )

        # Assert
        assert edited.body == "First, edited"
        assert edited.is_edited is True
        stored = await content_repo.find_by_thread(content.thread_id)
        assert [c.id for c in stored.comments] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_tombstone_is_terminal(self, integration_env):
        """A tombstoned comment rejects votes, edits and a second delete."""
        # Arrange
        content_repo = await integration_env.get(ContentRepository)
        content = await new_content(content_repo)
        comment = await new_comment(content_repo, content.thread_id)

        # Act
        tombstone = await content_repo.tombstone_comment(
            content.thread_id, comment.id, "[deleted]", utc_now()
        )
        vote = await content_repo.toggle_comment_upvote(
            content.thread_id, comment.id, UserId(uuid4())
        )
        edit = await content_repo.update_comment_body(
            content.thread_id, comment.id, "Back from the dead", utc_now()
        )
        second_delete = await content_repo.tombstone_comment(
            content.thread_id, comment.id, "[deleted]", utc_now()
        )

        # Assert
        assert tombstone.is_deleted is True
        assert tombstone.body == "[deleted]"
        assert vote is None
        assert edit is None
        assert second_delete is None
        stored = await content_repo.find_by_thread(content.thread_id)
        assert stored.find_comment(comment.id).body == "[deleted]"
        assert stored.live_comment_count == 0

    @pytest.mark.asyncio
    async def test_duplicate_thread_id_conflicts(self, integration_env):
        """The unique index on thread_id allows one document per thread."""
        # Arrange
        content_repo = await integration_env.get(ContentRepository)
        content = await new_content(content_repo)

        # Act & Assert
        with pytest.raises(ConflictError):
            await content_repo.create(content)
