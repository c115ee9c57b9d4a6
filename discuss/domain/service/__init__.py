"""Domain services."""

from .activity_recorder import ActivityRecorder
from .audit_service import ActivityPage, AuditService, DashboardStats
from .base import Service
from .category_service import CategoryService
from .comment_service import CommentResult, CommentService
from .jwt_service import JWTService
from .reply_counter import ReconcileOutcome, ReplyCounterSynchronizer
from .thread_creation_saga import ThreadCreationSaga
from .thread_service import ThreadDetail, ThreadPage, ThreadService
from .vote_service import VoteService

__all__ = [
    "ActivityPage",
    "ActivityRecorder",
    "AuditService",
    "CategoryService",
    "CommentResult",
    "CommentService",
    "DashboardStats",
    "JWTService",
    "ReconcileOutcome",
    "ReplyCounterSynchronizer",
    "Service",
    "ThreadCreationSaga",
    "ThreadDetail",
    "ThreadPage",
    "ThreadService",
    "VoteService",
]
