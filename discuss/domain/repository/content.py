"""Thread content repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from discuss.domain.model.content import Comment, ThreadContent
from discuss.domain.value import CommentId, TagName, ThreadId, UserId, VoteState


class ContentRepository(ABC):
    """Repository for thread content documents.

    Each mutating method is a single atomic update of one document. None
    return values mean the filter did not match (document or comment absent,
    or the comment already tombstoned).
    """

    @abstractmethod
    async def create(self, content: ThreadContent) -> ThreadContent:
        """Insert a new content document.

        Raises:
            ConflictError: If a document already exists for the thread
        """
        pass

    @abstractmethod
    async def find_by_thread(self, thread_id: ThreadId) -> Optional[ThreadContent]:
        """Find the content document of a thread.

        Args:
            thread_id: The thread ID

        Returns:
            The document if found, None otherwise
        """
        pass

    @abstractmethod
    async def delete(self, thread_id: ThreadId) -> bool:
        """Delete the content document of a thread.

        Returns:
            True if a document was deleted
        """
        pass

    @abstractmethod
    async def update_original_post(
        self,
        thread_id: ThreadId,
        edited_at: datetime,
        body: Optional[str] = None,
        tags: Optional[list[TagName]] = None,
    ) -> Optional[ThreadContent]:
        """Edit the original post body and/or the tag list.

        A body change marks the original post as edited.

        Returns:
            Updated document, or None if it does not exist
        """
        pass

    @abstractmethod
    async def push_comment(
        self, thread_id: ThreadId, comment: Comment
    ) -> Optional[Comment]:
        """Append a comment to the end of the comment sequence.

        Returns:
            The stored comment, or None if the document does not exist
        """
        pass

    @abstractmethod
    async def update_comment_body(
        self,
        thread_id: ThreadId,
        comment_id: CommentId,
        body: str,
        edited_at: datetime,
    ) -> Optional[Comment]:
        """Replace a live comment's body and mark it edited.

        Returns:
            Updated comment, or None if absent or tombstoned
        """
        pass

    @abstractmethod
    async def tombstone_comment(
        self,
        thread_id: ThreadId,
        comment_id: CommentId,
        placeholder: str,
        deleted_at: datetime,
    ) -> Optional[Comment]:
        """Soft-delete a live comment in place.

        Returns:
            The tombstoned comment, or None if absent or already tombstoned
        """
        pass

    @abstractmethod
    async def toggle_post_upvote(
        self, thread_id: ThreadId, voter_id: UserId
    ) -> Optional[VoteState]:
        """Add or remove voter_id from the original post's voters.

        Membership and count change in the same atomic write.

        Returns:
            New vote state, or None if the document does not exist
        """
        pass

    @abstractmethod
    async def toggle_comment_upvote(
        self, thread_id: ThreadId, comment_id: CommentId, voter_id: UserId
    ) -> Optional[VoteState]:
        """Add or remove voter_id from a live comment's voters.

        Returns:
            New vote state, or None if absent or tombstoned
        """
        pass
