"""Unit tests for GetThreadUseCase."""

from uuid import uuid4

import pytest

from discuss.application.usecase.thread import GetThreadRequest, GetThreadUseCase
from discuss.domain.repository import CategoryRepository
from discuss.domain.service import CommentService, ThreadCreationSaga, VoteService
from discuss.domain.value import VoteTarget
from tests.conftest import make_actor, seed_category, seed_thread
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetThreadUseCase:
    """Tests for GetThreadUseCase."""

    @pytest.mark.asyncio
    async def test_upvote_flags_follow_the_viewer(self, unit_env):
        """has_upvoted is true only for the viewer who voted."""
        # Arrange
        use_case = await unit_env.get(GetThreadUseCase)
        vote_service = await unit_env.get(VoteService)
        comment_service = await unit_env.get(CommentService)
        thread = await seed_thread(
            await unit_env.get(ThreadCreationSaga),
            await seed_category(await unit_env.get(CategoryRepository)),
        )
        voter = make_actor()
        added = await comment_service.add_comment(thread.id, make_actor(), "Hi")
        await vote_service.toggle_upvote(VoteTarget.POST, thread.id, voter.user_id)
        await vote_service.toggle_upvote(
            VoteTarget.COMMENT, thread.id, voter.user_id, comment_id=added.comment.id
        )

        # Act
        as_voter = await use_case.execute(
            GetThreadRequest(slug=str(thread.slug), viewer_id=voter.user_id)
        )
        as_stranger = await use_case.execute(
            GetThreadRequest(slug=str(thread.slug), viewer_id=uuid4())
        )
        anonymous = await use_case.execute(GetThreadRequest(slug=str(thread.slug)))

        # Assert
        assert as_voter.content.original_post.has_upvoted is True
        assert as_voter.content.comments[0].has_upvoted is True
        assert as_stranger.content.original_post.has_upvoted is False
        assert as_stranger.content.comments[0].has_upvoted is False
        assert anonymous.content.original_post.upvotes == 1
        assert anonymous.content.original_post.has_upvoted is False
        assert anonymous.thread.reply_count == 1
