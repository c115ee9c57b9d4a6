"""Domain value objects for discussions.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from discuss.domain.value.common import RootValueObject, ValueObject
from discuss.domain.value.identifiers import UserId


class Role(str, Enum):
    """Role supplied by the identity provider."""

    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"

    @property
    def can_moderate(self) -> bool:
        """Moderators and admins may edit or delete other people's content."""
        return self in (Role.MODERATOR, Role.ADMIN)


class CategoryStatus(str, Enum):
    """Lifecycle status of a category."""

    ACTIVE = "active"
    ARCHIVED = "archived"


class VoteTarget(str, Enum):
    """Kind of entity that can be upvoted."""

    POST = "post"
    COMMENT = "comment"


class ThreadSort(str, Enum):
    """Sort order for thread listings. Pinned threads always come first."""

    ACTIVITY = "activity"  # last_reply_at DESC NULLS LAST
    NEWEST = "newest"  # created_at DESC
    POPULAR = "popular"  # view_count DESC
    REPLIES = "replies"  # reply_count DESC


class ActivityAction(str, Enum):
    """Closed set of audited actions."""

    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    REGISTER = "REGISTER"
    CREATE_THREAD = "CREATE_THREAD"
    UPDATE_THREAD = "UPDATE_THREAD"
    DELETE_THREAD = "DELETE_THREAD"
    CREATE_COMMENT = "CREATE_COMMENT"
    UPDATE_COMMENT = "UPDATE_COMMENT"
    DELETE_COMMENT = "DELETE_COMMENT"
    UPVOTE_POST = "UPVOTE_POST"
    UPVOTE_COMMENT = "UPVOTE_COMMENT"
    BAN_USER = "BAN_USER"
    UNBAN_USER = "UNBAN_USER"
    CHANGE_ROLE = "CHANGE_ROLE"
    UPDATE_PROFILE = "UPDATE_PROFILE"
    CREATE_CATEGORY = "CREATE_CATEGORY"
    UPDATE_CATEGORY = "UPDATE_CATEGORY"


class Slug(RootValueObject[str]):
    """URL-safe slug for threads and categories.

    Must be lowercase, alphanumeric with hyphens, 1-500 characters.
    Examples: 'hello-world-a3f7', 'general-k2p9'
    """

    @field_validator("root")
    @classmethod
    def validate_slug_format(cls, v: str) -> str:
        """Validate slug format."""
        if not re.match(r"^[a-z0-9]+(?:-[a-z0-9]+)*$", v):
            raise ValueError(
                "Slug must be lowercase alphanumeric with hyphens, "
                "no leading/trailing hyphens or consecutive hyphens"
            )
        if len(v) > 500:
            raise ValueError("Slug must be 1-500 characters")
        return v


class TagName(RootValueObject[str]):
    """Free-form thread tag, stored lower-cased and trimmed."""

    @field_validator("root")
    @classmethod
    def normalize_tag(cls, v: str) -> str:
        """Lower-case and trim the tag."""
        v = v.strip().lower()
        if len(v) < 1 or len(v) > 50:
            raise ValueError("Tag must be 1-50 characters")
        return v


class Actor(ValueObject):
    """Identity performing a mutation, as asserted by the identity provider."""

    user_id: UserId
    role: Role = Role.USER

    def can_modify(self, author_id: UserId) -> bool:
        """Whether this actor may edit or delete content written by author_id."""
        return self.user_id == author_id or self.role.can_moderate


class RequestOrigin(ValueObject):
    """Where a request came from, recorded on activity log entries."""

    ip_address: str | None = None
    user_agent: str | None = None


class VoteState(ValueObject):
    """Upvote state of a post or comment after a toggle."""

    count: int
    voted: bool
