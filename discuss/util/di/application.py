"""Application layer DI providers."""

from dishka import Scope, provide

from discuss.application.usecase.admin import (
    GetActivityLogUseCase,
    GetDashboardStatsUseCase,
)
from discuss.application.usecase.category import (
    CreateCategoryUseCase,
    GetCategoryUseCase,
    ListCategoriesUseCase,
    UpdateCategoryUseCase,
)
from discuss.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    UpdateCommentUseCase,
)
from discuss.application.usecase.maintenance import ReconcileReplyCountsUseCase
from discuss.application.usecase.thread import (
    CreateThreadUseCase,
    DeleteThreadUseCase,
    GetThreadUseCase,
    ListThreadsUseCase,
    ToggleLockUseCase,
    TogglePinUseCase,
    UpdateThreadUseCase,
)
from discuss.application.usecase.vote import ToggleUpvoteUseCase
from discuss.domain.repository import ThreadRepository
from discuss.domain.service import (
    AuditService,
    CategoryService,
    CommentService,
    ReplyCounterSynchronizer,
    ThreadCreationSaga,
    ThreadService,
    VoteService,
)
from discuss.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Thread use cases
    @provide(scope=Scope.REQUEST)
    def get_create_thread_use_case(self, saga: ThreadCreationSaga) -> CreateThreadUseCase:
        """Provide create thread use case."""
        return CreateThreadUseCase(saga=saga)

    @provide(scope=Scope.REQUEST)
    def get_get_thread_use_case(self, thread_service: ThreadService) -> GetThreadUseCase:
        """Provide get thread use case."""
        return GetThreadUseCase(thread_service=thread_service)

    @provide(scope=Scope.REQUEST)
    def get_list_threads_use_case(
        self, thread_service: ThreadService
    ) -> ListThreadsUseCase:
        """Provide list threads use case."""
        return ListThreadsUseCase(thread_service=thread_service)

    @provide(scope=Scope.REQUEST)
    def get_update_thread_use_case(
        self, thread_service: ThreadService
    ) -> UpdateThreadUseCase:
        """Provide update thread use case."""
        return UpdateThreadUseCase(thread_service=thread_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_thread_use_case(
        self, thread_service: ThreadService
    ) -> DeleteThreadUseCase:
        """Provide delete thread use case."""
        return DeleteThreadUseCase(thread_service=thread_service)

    @provide(scope=Scope.REQUEST)
    def get_toggle_pin_use_case(self, thread_service: ThreadService) -> TogglePinUseCase:
        """Provide pin toggle use case."""
        return TogglePinUseCase(thread_service=thread_service)

    @provide(scope=Scope.REQUEST)
    def get_toggle_lock_use_case(
        self, thread_service: ThreadService
    ) -> ToggleLockUseCase:
        """Provide lock toggle use case."""
        return ToggleLockUseCase(thread_service=thread_service)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self, comment_service: CommentService
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_toggle_upvote_use_case(
        self, vote_service: VoteService
    ) -> ToggleUpvoteUseCase:
        """Provide toggle upvote use case."""
        return ToggleUpvoteUseCase(vote_service=vote_service)

    # Category use cases
    @provide(scope=Scope.REQUEST)
    def get_list_categories_use_case(
        self, category_service: CategoryService
    ) -> ListCategoriesUseCase:
        """Provide list categories use case."""
        return ListCategoriesUseCase(category_service=category_service)

    @provide(scope=Scope.REQUEST)
    def get_get_category_use_case(
        self, category_service: CategoryService
    ) -> GetCategoryUseCase:
        """Provide get category use case."""
        return GetCategoryUseCase(category_service=category_service)

    @provide(scope=Scope.REQUEST)
    def get_create_category_use_case(
        self, category_service: CategoryService
    ) -> CreateCategoryUseCase:
        """Provide create category use case."""
        return CreateCategoryUseCase(category_service=category_service)

    @provide(scope=Scope.REQUEST)
    def get_update_category_use_case(
        self, category_service: CategoryService
    ) -> UpdateCategoryUseCase:
        """Provide update category use case."""
        return UpdateCategoryUseCase(category_service=category_service)

    # Maintenance use cases
    @provide(scope=Scope.REQUEST)
    def get_reconcile_reply_counts_use_case(
        self,
        thread_repository: ThreadRepository,
        reply_counter: ReplyCounterSynchronizer,
    ) -> ReconcileReplyCountsUseCase:
        """Provide reply count reconciliation use case."""
        return ReconcileReplyCountsUseCase(
            thread_repository=thread_repository, reply_counter=reply_counter
        )

    # Admin use cases
    @provide(scope=Scope.REQUEST)
    def get_activity_log_use_case(
        self, audit_service: AuditService
    ) -> GetActivityLogUseCase:
        """Provide activity log use case."""
        return GetActivityLogUseCase(audit_service=audit_service)

    @provide(scope=Scope.REQUEST)
    def get_dashboard_stats_use_case(
        self, audit_service: AuditService
    ) -> GetDashboardStatsUseCase:
        """Provide dashboard stats use case."""
        return GetDashboardStatsUseCase(audit_service=audit_service)
