"""In-memory content repository for testing."""

from datetime import datetime
from typing import Optional

from discuss.domain.error import ConflictError
from discuss.domain.model import Comment, ThreadContent
from discuss.domain.repository.content import ContentRepository
from discuss.domain.value import CommentId, TagName, ThreadId, UserId, VoteState


class InMemoryContentRepository(ContentRepository):
    """In-memory implementation of ContentRepository for testing.

    Each method reads and replaces one document without awaiting in
    between, which gives the same per-document atomicity as the real store
    under asyncio.
    """

    def __init__(self) -> None:
        self._documents: dict[ThreadId, ThreadContent] = {}

    async def create(self, content: ThreadContent) -> ThreadContent:
        if content.thread_id in self._documents:
            raise ConflictError("Thread content")
        self._documents[content.thread_id] = content
        return content

    async def find_by_thread(self, thread_id: ThreadId) -> Optional[ThreadContent]:
        return self._documents.get(thread_id)

    async def delete(self, thread_id: ThreadId) -> bool:
        return self._documents.pop(thread_id, None) is not None

    async def update_original_post(
        self,
        thread_id: ThreadId,
        edited_at: datetime,
        body: Optional[str] = None,
        tags: Optional[list[TagName]] = None,
    ) -> Optional[ThreadContent]:
        doc = self._documents.get(thread_id)
        if doc is None:
            return None

        changes: dict = {"updated_at": edited_at}
        if body is not None:
            changes["original_post"] = doc.original_post.evolve(
                body=body, is_edited=True, edited_at=edited_at
            )
        if tags is not None:
            changes["tags"] = list(tags)

        updated = doc.evolve(**changes)
        self._documents[thread_id] = updated
        return updated

    async def push_comment(
        self, thread_id: ThreadId, comment: Comment
    ) -> Optional[Comment]:
        doc = self._documents.get(thread_id)
        if doc is None:
            return None
        self._documents[thread_id] = doc.evolve(
            comments=[*doc.comments, comment], updated_at=comment.created_at
        )
        return comment

    def _replace_live_comment(
        self, thread_id: ThreadId, comment_id: CommentId, **changes
    ) -> Optional[Comment]:
        doc = self._documents.get(thread_id)
        if doc is None:
            return None

        comments = list(doc.comments)
        for i, comment in enumerate(comments):
            if comment.id == comment_id and not comment.is_deleted:
                comments[i] = comment.evolve(**changes)
                self._documents[thread_id] = doc.evolve(comments=comments)
                return comments[i]
        return None

    async def update_comment_body(
        self,
        thread_id: ThreadId,
        comment_id: CommentId,
        body: str,
        edited_at: datetime,
    ) -> Optional[Comment]:
        return self._replace_live_comment(
            thread_id,
            comment_id,
            body=body,
            is_edited=True,
            edited_at=edited_at,
            updated_at=edited_at,
        )

    async def tombstone_comment(
        self,
        thread_id: ThreadId,
        comment_id: CommentId,
        placeholder: str,
        deleted_at: datetime,
    ) -> Optional[Comment]:
        return self._replace_live_comment(
            thread_id,
            comment_id,
            body=placeholder,
            is_deleted=True,
            deleted_at=deleted_at,
            updated_at=deleted_at,
        )

    @staticmethod
    def _toggled(voters: list[UserId], voter_id: UserId) -> tuple[list[UserId], bool]:
        if voter_id in voters:
            return [v for v in voters if v != voter_id], False
        return [*voters, voter_id], True

    async def toggle_post_upvote(
        self, thread_id: ThreadId, voter_id: UserId
    ) -> Optional[VoteState]:
        doc = self._documents.get(thread_id)
        if doc is None:
            return None

        voters, voted = self._toggled(doc.original_post.upvoted_by, voter_id)
        post = doc.original_post.evolve(upvoted_by=voters, upvotes=len(voters))
        self._documents[thread_id] = doc.evolve(original_post=post)
        return VoteState(count=post.upvotes, voted=voted)

    async def toggle_comment_upvote(
        self, thread_id: ThreadId, comment_id: CommentId, voter_id: UserId
    ) -> Optional[VoteState]:
        doc = self._documents.get(thread_id)
        comment = doc.find_comment(comment_id) if doc else None
        if comment is None or comment.is_deleted:
            return None

        voters, voted = self._toggled(comment.upvoted_by, voter_id)
        updated = self._replace_live_comment(
            thread_id, comment_id, upvoted_by=voters, upvotes=len(voters)
        )
        return VoteState(count=updated.upvotes, voted=voted)
