"""Unit tests for CommentService."""

from uuid import uuid4

import pytest

from discuss.config import ForumSettings
from discuss.domain.error import ForbiddenError, NotFoundError
from discuss.domain.repository import (
    ActivityRepository,
    CategoryRepository,
    ContentRepository,
    ThreadRepository,
)
from discuss.domain.service import (
    ActivityRecorder,
    CommentService,
    ReplyCounterSynchronizer,
    ThreadCreationSaga,
    ThreadService,
)
from discuss.domain.value import ActivityAction, CommentId, Role, ThreadId
from tests.conftest import make_actor, seed_category, seed_thread
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


async def new_thread(env, **kwargs):
    return await seed_thread(
        await env.get(ThreadCreationSaga),
        await seed_category(await env.get(CategoryRepository)),
        **kwargs,
    )


class TestAddComment:
    """Tests for add_comment."""

    @pytest.mark.asyncio
    async def test_add_comment_appends_and_counts(self, unit_env):
        """A comment is appended to the content and counted on the thread."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        content_repo = await unit_env.get(ContentRepository)
        thread_repo = await unit_env.get(ThreadRepository)
        thread = await new_thread(unit_env)
        author = make_actor()

        # Act
        result = await comment_service.add_comment(thread.id, author, "Nice result")

        # Assert
        assert result.counter_synced is True
        assert result.comment.body == "Nice result"
        assert result.comment.author_id == author.user_id
        assert result.comment.is_deleted is False
        assert result.comment.upvotes == 0

        content = await content_repo.find_by_thread(thread.id)
        assert [c.id for c in content.comments] == [result.comment.id]
        assert (await thread_repo.find_by_id(thread.id)).reply_count == 1

    @pytest.mark.asyncio
    async def test_comments_keep_insertion_order(self, unit_env):
        """Comments are appended in the order they were added."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        content_repo = await unit_env.get(ContentRepository)
        thread = await new_thread(unit_env)
        author = make_actor()

        # Act
        ids = [
            (await comment_service.add_comment(thread.id, author, f"#{i}")).comment.id
            for i in range(4)
        ]

        # Assert
        content = await content_repo.find_by_thread(thread.id)
        assert [c.id for c in content.comments] == ids

    @pytest.mark.asyncio
    async def test_reply_to_existing_comment(self, unit_env):
        """A reply records its parent."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        thread = await new_thread(unit_env)
        parent = await comment_service.add_comment(thread.id, make_actor(), "Parent")

        # Act
        reply = await comment_service.add_comment(
            thread.id, make_actor(), "Reply", parent_comment_id=parent.comment.id
        )

        # Assert
        assert reply.comment.parent_comment_id == parent.comment.id

    @pytest.mark.asyncio
    async def test_reply_to_tombstoned_parent_is_allowed(self, unit_env):
        """Deleted comments remain valid reply targets."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        thread = await new_thread(unit_env)
        author = make_actor()
        parent = await comment_service.add_comment(thread.id, author, "Parent")
        await comment_service.soft_delete_comment(thread.id, parent.comment.id, author)

        # Act
        reply = await comment_service.add_comment(
            thread.id, make_actor(), "Late reply", parent_comment_id=parent.comment.id
        )

        # Assert
        assert reply.comment.parent_comment_id == parent.comment.id

    @pytest.mark.asyncio
    async def test_unknown_parent_raises_not_found(self, unit_env):
        """Replying to a comment that is not in the thread fails."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        content_repo = await unit_env.get(ContentRepository)
        thread = await new_thread(unit_env)

        # Act & Assert
        with pytest.raises(NotFoundError, match="Parent comment"):
            await comment_service.add_comment(
                thread.id,
                make_actor(),
                "Reply to nothing",
                parent_comment_id=CommentId(uuid4()),
            )
        assert (await content_repo.find_by_thread(thread.id)).comments == []

    @pytest.mark.asyncio
    async def test_missing_thread_raises_not_found(self, unit_env):
        """Comments need an existing thread."""
        # Arrange
        comment_service = await unit_env.get(CommentService)

        # Act & Assert
        with pytest.raises(NotFoundError, match="Thread"):
            await comment_service.add_comment(ThreadId(uuid4()), make_actor(), "Hi")

    @pytest.mark.asyncio
    async def test_locked_thread_rejects_comments(self, unit_env):
        """Locked threads reject comments without writing anything."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        thread_service = await unit_env.get(ThreadService)
        content_repo = await unit_env.get(ContentRepository)
        thread_repo = await unit_env.get(ThreadRepository)
        thread = await new_thread(unit_env)
        await thread_service.toggle_lock(thread.id, make_actor(Role.MODERATOR))

        # Act & Assert
        with pytest.raises(ForbiddenError, match="locked"):
            await comment_service.add_comment(thread.id, make_actor(), "Too late")

        assert (await content_repo.find_by_thread(thread.id)).comments == []
        assert (await thread_repo.find_by_id(thread.id)).reply_count == 0

    @pytest.mark.asyncio
    async def test_locked_thread_rejects_moderators_too(self, unit_env):
        """The lock applies to moderators as well."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        thread_service = await unit_env.get(ThreadService)
        moderator = make_actor(Role.MODERATOR)
        thread = await new_thread(unit_env)
        await thread_service.toggle_lock(thread.id, moderator)

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await comment_service.add_comment(thread.id, moderator, "Mod note")

    @pytest.mark.asyncio
    async def test_counter_failure_still_returns_comment(self, unit_env):
        """If the counter update fails the comment stays and drift is flagged."""

        # Arrange
        class BrokenCounter(ReplyCounterSynchronizer):
            async def on_comment_created(self, thread_id, actor_id) -> bool:
                return False

        thread_repo = await unit_env.get(ThreadRepository)
        content_repo = await unit_env.get(ContentRepository)
        comment_service = CommentService(
            thread_repository=thread_repo,
            content_repository=content_repo,
            reply_counter=BrokenCounter(thread_repo, content_repo),
            activity_recorder=await unit_env.get(ActivityRecorder),
            forum_settings=ForumSettings(),
        )
        thread = await new_thread(unit_env)

        # Act
        result = await comment_service.add_comment(thread.id, make_actor(), "Stored")

        # Assert
        assert result.counter_synced is False
        content = await content_repo.find_by_thread(thread.id)
        assert len(content.comments) == 1
        assert (await thread_repo.find_by_id(thread.id)).reply_count == 0

    @pytest.mark.asyncio
    async def test_add_comment_records_activity(self, unit_env):
        """CREATE_COMMENT is recorded for the author."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        recorder = await unit_env.get(ActivityRecorder)
        activity_repo = await unit_env.get(ActivityRepository)
        thread = await new_thread(unit_env)
        author = make_actor()

        # Act
        result = await comment_service.add_comment(thread.id, author, "Audited")
        await recorder.drain()

        # Assert
        entries = await activity_repo.find_by_actor(author.user_id)
        assert [e.action for e in entries] == [ActivityAction.CREATE_COMMENT]
        assert entries[0].resource == f"thread:{thread.id}:comment:{result.comment.id}"


class TestEditComment:
    """Tests for edit_comment."""

    @pytest.mark.asyncio
    async def test_author_can_edit(self, unit_env):
        """Editing replaces the body and marks the comment edited."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        thread = await new_thread(unit_env)
        author = make_actor()
        added = await comment_service.add_comment(thread.id, author, "Typo")

        # Act
        result = await comment_service.edit_comment(
            thread.id, added.comment.id, author, "Fixed"
        )

        # Assert
        assert result.comment.body == "Fixed"
        assert result.comment.is_edited is True
        assert result.comment.edited_at is not None

    @pytest.mark.asyncio
    async def test_moderator_can_edit_others(self, unit_env):
        """Moderators may edit anyone's comment."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        thread = await new_thread(unit_env)
        added = await comment_service.add_comment(thread.id, make_actor(), "Rude")

        # Act
        result = await comment_service.edit_comment(
            thread.id, added.comment.id, make_actor(Role.MODERATOR), "[edited by mod]"
        )

        # Assert
        assert result.comment.body == "[edited by mod]"

    @pytest.mark.asyncio
    async def test_other_user_cannot_edit(self, unit_env):
        """Someone else's comment cannot be edited by a regular user."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        thread = await new_thread(unit_env)
        added = await comment_service.add_comment(thread.id, make_actor(), "Mine")

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await comment_service.edit_comment(
                thread.id, added.comment.id, make_actor(), "Hijacked"
            )

    @pytest.mark.asyncio
    async def test_tombstone_cannot_be_edited(self, unit_env):
        """Deleted is terminal: no edits afterwards."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        content_repo = await unit_env.get(ContentRepository)
        thread = await new_thread(unit_env)
        author = make_actor()
        added = await comment_service.add_comment(thread.id, author, "Gone soon")
        await comment_service.soft_delete_comment(thread.id, added.comment.id, author)

        # Act & Assert
        with pytest.raises(NotFoundError, match="Comment"):
            await comment_service.edit_comment(
                thread.id, added.comment.id, author, "Back from the dead"
            )

        content = await content_repo.find_by_thread(thread.id)
        assert content.comments[0].body == "[deleted]"


class TestSoftDeleteComment:
    """Tests for soft_delete_comment."""

    @pytest.mark.asyncio
    async def test_delete_leaves_tombstone_in_place(self, unit_env):
        """The comment keeps its id, parent and position."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        content_repo = await unit_env.get(ContentRepository)
        thread_repo = await unit_env.get(ThreadRepository)
        thread = await new_thread(unit_env)
        author = make_actor()
        first = await comment_service.add_comment(thread.id, author, "First")
        second = await comment_service.add_comment(
            thread.id, author, "Second", parent_comment_id=first.comment.id
        )

        # Act
        result = await comment_service.soft_delete_comment(
            thread.id, second.comment.id, author
        )

        # Assert
        assert result.counter_synced is True
        tombstone = result.comment
        assert tombstone.id == second.comment.id
        assert tombstone.parent_comment_id == first.comment.id
        assert tombstone.is_deleted is True
        assert tombstone.deleted_at is not None
        assert tombstone.body == "[deleted]"

        content = await content_repo.find_by_thread(thread.id)
        assert [c.id for c in content.comments] == [first.comment.id, second.comment.id]
        assert (await thread_repo.find_by_id(thread.id)).reply_count == 1

    @pytest.mark.asyncio
    async def test_delete_twice_raises_not_found(self, unit_env):
        """A tombstone cannot be deleted again and the counter is untouched."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        thread_repo = await unit_env.get(ThreadRepository)
        thread = await new_thread(unit_env)
        author = make_actor()
        await comment_service.add_comment(thread.id, author, "Stays")
        added = await comment_service.add_comment(thread.id, author, "Goes")
        await comment_service.soft_delete_comment(thread.id, added.comment.id, author)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await comment_service.soft_delete_comment(
                thread.id, added.comment.id, author
            )
        assert (await thread_repo.find_by_id(thread.id)).reply_count == 1

    @pytest.mark.asyncio
    async def test_other_user_cannot_delete(self, unit_env):
        """Regular users cannot delete other people's comments."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        thread = await new_thread(unit_env)
        added = await comment_service.add_comment(thread.id, make_actor(), "Mine")

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await comment_service.soft_delete_comment(
                thread.id, added.comment.id, make_actor()
            )

    @pytest.mark.asyncio
    async def test_admin_can_delete_others(self, unit_env):
        """Admins moderate too."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        thread = await new_thread(unit_env)
        added = await comment_service.add_comment(thread.id, make_actor(), "Spam")

        # Act
        result = await comment_service.soft_delete_comment(
            thread.id, added.comment.id, make_actor(Role.ADMIN)
        )

        # Assert
        assert result.comment.is_deleted is True

    @pytest.mark.asyncio
    async def test_custom_placeholder(self, unit_env):
        """The placeholder body comes from configuration."""
        # Arrange
        thread_repo = await unit_env.get(ThreadRepository)
        content_repo = await unit_env.get(ContentRepository)
        comment_service = CommentService(
            thread_repository=thread_repo,
            content_repository=content_repo,
            reply_counter=await unit_env.get(ReplyCounterSynchronizer),
            activity_recorder=await unit_env.get(ActivityRecorder),
            forum_settings=ForumSettings(deleted_placeholder="[removed]"),
        )
        thread = await new_thread(unit_env)
        author = make_actor()
        added = await comment_service.add_comment(thread.id, author, "Bye")

        # Act
        result = await comment_service.soft_delete_comment(
            thread.id, added.comment.id, author
        )

        # Assert
        assert result.comment.body == "[removed]"
