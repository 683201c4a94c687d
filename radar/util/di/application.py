"""Application layer DI providers."""

from dishka import Scope, provide

from radar.application.usecase.moderation import (
    DeleteContentUseCase,
    FeatureContentUseCase,
    ReportContentUseCase,
)
from radar.application.usecase.poll import (
    ClosePollUseCase,
    CreatePollUseCase,
    GetPollResultsUseCase,
    GetPollUseCase,
    ListPollsUseCase,
    VotePollUseCase,
)
from radar.application.usecase.vote import VoteContentUseCase
from radar.domain.repository import UnitOfWork
from radar.domain.service import ContentVoteService, ModerationService, PollService
from radar.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Poll use cases
    @provide(scope=Scope.REQUEST)
    def get_create_poll_use_case(
        self, poll_service: PollService, unit_of_work: UnitOfWork
    ) -> CreatePollUseCase:
        """Provide create poll use case."""
        return CreatePollUseCase(poll_service=poll_service, unit_of_work=unit_of_work)

    @provide(scope=Scope.REQUEST)
    def get_get_poll_use_case(self, poll_service: PollService) -> GetPollUseCase:
        """Provide get poll use case."""
        return GetPollUseCase(poll_service=poll_service)

    @provide(scope=Scope.REQUEST)
    def get_list_polls_use_case(self, poll_service: PollService) -> ListPollsUseCase:
        """Provide list polls use case."""
        return ListPollsUseCase(poll_service=poll_service)

    @provide(scope=Scope.REQUEST)
    def get_vote_poll_use_case(
        self, poll_service: PollService, unit_of_work: UnitOfWork
    ) -> VotePollUseCase:
        """Provide vote poll use case."""
        return VotePollUseCase(poll_service=poll_service, unit_of_work=unit_of_work)

    @provide(scope=Scope.REQUEST)
    def get_get_poll_results_use_case(
        self, poll_service: PollService
    ) -> GetPollResultsUseCase:
        """Provide get poll results use case."""
        return GetPollResultsUseCase(poll_service=poll_service)

    @provide(scope=Scope.REQUEST)
    def get_close_poll_use_case(
        self, poll_service: PollService, unit_of_work: UnitOfWork
    ) -> ClosePollUseCase:
        """Provide close poll use case."""
        return ClosePollUseCase(poll_service=poll_service, unit_of_work=unit_of_work)

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_vote_content_use_case(
        self, content_vote_service: ContentVoteService, unit_of_work: UnitOfWork
    ) -> VoteContentUseCase:
        """Provide reply/comment vote use case."""
        return VoteContentUseCase(
            content_vote_service=content_vote_service, unit_of_work=unit_of_work
        )

    # Moderation use cases
    @provide(scope=Scope.REQUEST)
    def get_report_content_use_case(
        self, moderation_service: ModerationService, unit_of_work: UnitOfWork
    ) -> ReportContentUseCase:
        """Provide report content use case."""
        return ReportContentUseCase(
            moderation_service=moderation_service, unit_of_work=unit_of_work
        )

    @provide(scope=Scope.REQUEST)
    def get_feature_content_use_case(
        self, moderation_service: ModerationService, unit_of_work: UnitOfWork
    ) -> FeatureContentUseCase:
        """Provide feature content use case."""
        return FeatureContentUseCase(
            moderation_service=moderation_service, unit_of_work=unit_of_work
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_content_use_case(
        self, moderation_service: ModerationService, unit_of_work: UnitOfWork
    ) -> DeleteContentUseCase:
        """Provide delete content use case."""
        return DeleteContentUseCase(
            moderation_service=moderation_service, unit_of_work=unit_of_work
        )
