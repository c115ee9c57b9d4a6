"""Domain layer DI providers."""

from dishka import Scope, provide

from discuss.config import AuthSettings, ForumSettings
from discuss.domain.repository import (
    ActivityRepository,
    CategoryRepository,
    ContentRepository,
    ThreadRepository,
)
from discuss.domain.service import (
    ActivityRecorder,
    AuditService,
    CategoryService,
    CommentService,
    JWTService,
    ReplyCounterSynchronizer,
    ThreadCreationSaga,
    ThreadService,
    VoteService,
)
from discuss.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with the repository/session
    lifecycle. The activity recorder is APP-scoped because its background
    writes outlive the request that scheduled them.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_activity_recorder(
        self, activity_repository: ActivityRepository
    ) -> ActivityRecorder:
        """Provide the shared fire-and-forget activity recorder."""
        return ActivityRecorder(activity_repository=activity_repository)

    @provide(scope=Scope.APP)
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_category_service(
        self,
        category_repository: CategoryRepository,
        activity_recorder: ActivityRecorder,
    ) -> CategoryService:
        """Provide category domain service."""
        return CategoryService(
            category_repository=category_repository,
            activity_recorder=activity_recorder,
        )

    @provide
    def get_reply_counter(
        self,
        thread_repository: ThreadRepository,
        content_repository: ContentRepository,
    ) -> ReplyCounterSynchronizer:
        """Provide reply counter synchronizer."""
        return ReplyCounterSynchronizer(
            thread_repository=thread_repository,
            content_repository=content_repository,
        )

    @provide
    def get_thread_creation_saga(
        self,
        thread_repository: ThreadRepository,
        content_repository: ContentRepository,
        category_service: CategoryService,
        activity_recorder: ActivityRecorder,
        forum_settings: ForumSettings,
    ) -> ThreadCreationSaga:
        """Provide thread creation saga."""
        return ThreadCreationSaga(
            thread_repository=thread_repository,
            content_repository=content_repository,
            category_service=category_service,
            activity_recorder=activity_recorder,
            forum_settings=forum_settings,
        )

    @provide
    def get_thread_service(
        self,
        thread_repository: ThreadRepository,
        content_repository: ContentRepository,
        activity_recorder: ActivityRecorder,
    ) -> ThreadService:
        """Provide thread domain service."""
        return ThreadService(
            thread_repository=thread_repository,
            content_repository=content_repository,
            activity_recorder=activity_recorder,
        )

    @provide
    def get_comment_service(
        self,
        thread_repository: ThreadRepository,
        content_repository: ContentRepository,
        reply_counter: ReplyCounterSynchronizer,
        activity_recorder: ActivityRecorder,
        forum_settings: ForumSettings,
    ) -> CommentService:
        """Provide comment lifecycle domain service."""
        return CommentService(
            thread_repository=thread_repository,
            content_repository=content_repository,
            reply_counter=reply_counter,
            activity_recorder=activity_recorder,
            forum_settings=forum_settings,
        )

    @provide
    def get_vote_service(
        self,
        content_repository: ContentRepository,
        activity_recorder: ActivityRecorder,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            content_repository=content_repository,
            activity_recorder=activity_recorder,
        )

    @provide
    def get_audit_service(
        self,
        activity_repository: ActivityRepository,
        thread_repository: ThreadRepository,
    ) -> AuditService:
        """Provide activity log read service."""
        return AuditService(
            activity_repository=activity_repository,
            thread_repository=thread_repository,
        )
