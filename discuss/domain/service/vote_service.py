"""Vote domain service."""

from typing import Optional

import logfire

from discuss.domain.error import NotFoundError, ValidationError
from discuss.domain.repository import ContentRepository
from discuss.domain.value import (
    ActivityAction,
    CommentId,
    RequestOrigin,
    ThreadId,
    UserId,
    VoteState,
    VoteTarget,
)

from .activity_recorder import ActivityRecorder
from .base import Service


class VoteService(Service):
    """Toggles upvotes on original posts and comments.

    A toggle is one conditional atomic update in the content store, so the
    upvote count always equals the number of voters and repeated toggles by
    the same voter alternate cleanly.
    """

    def __init__(
        self,
        content_repository: ContentRepository,
        activity_recorder: ActivityRecorder,
    ) -> None:
        """Initialize vote service.

        Args:
            content_repository: Content store
            activity_recorder: Audit recorder
        """
        self.content_repository = content_repository
        self.activity_recorder = activity_recorder

    async def toggle_upvote(
        self,
        target: VoteTarget,
        thread_id: ThreadId,
        voter_id: UserId,
        comment_id: Optional[CommentId] = None,
        origin: Optional[RequestOrigin] = None,
    ) -> VoteState:
        """Add the voter's upvote if absent, remove it if present.

        Args:
            target: Original post or comment
            thread_id: Thread holding the target
            voter_id: Voting user
            comment_id: Required when target is a comment
            origin: Request origin for the audit entry

        Returns:
            Count and membership after the toggle

        Raises:
            ValidationError: If a comment target has no comment_id
            NotFoundError: If the thread content or live comment is missing
        """
        with logfire.span(
            "vote_service.toggle_upvote",
            target=target.value,
            thread_id=str(thread_id),
            comment_id=str(comment_id) if comment_id else None,
            voter_id=str(voter_id),
        ):
            if target == VoteTarget.POST:
                state = await self.content_repository.toggle_post_upvote(
                    thread_id, voter_id
                )
                if state is None:
                    raise NotFoundError("Thread content", str(thread_id))
                resource = f"thread:{thread_id}"
                action = ActivityAction.UPVOTE_POST
            else:
                if comment_id is None:
                    raise ValidationError("comment_id is required to vote on a comment")
                state = await self.content_repository.toggle_comment_upvote(
                    thread_id, comment_id, voter_id
                )
                if state is None:
                    raise NotFoundError("Comment", str(comment_id))
                resource = f"thread:{thread_id}:comment:{comment_id}"
                action = ActivityAction.UPVOTE_COMMENT

            logfire.info(
                "Upvote toggled", target=target.value, voted=state.voted, count=state.count
            )
            self.activity_recorder.record(
                voter_id,
                action,
                resource=resource,
                metadata={"voted": state.voted},
                origin=origin,
            )
            return state
