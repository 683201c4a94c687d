"""Domain layer DI providers."""

from dishka import Scope, provide

from radar.config import AuthSettings, ModerationSettings, PollSettings
from radar.domain.repository import (
    PlayerCommentRepository,
    PlayerRepository,
    PollRepository,
    PollVoteRepository,
    ReplyRepository,
    ReportRepository,
    ThreadRepository,
    UserRepository,
    VoteRepository,
)
from radar.domain.service import (
    ContentService,
    ContentVoteService,
    JWTService,
    ModerationService,
    PollService,
    UserService,
)
from radar.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_poll_service(
        self,
        poll_repository: PollRepository,
        poll_vote_repository: PollVoteRepository,
        thread_repository: ThreadRepository,
        player_repository: PlayerRepository,
        user_service: UserService,
        poll_settings: PollSettings,
        moderation_settings: ModerationSettings,
    ) -> PollService:
        """Provide poll domain service."""
        return PollService(
            poll_repository=poll_repository,
            poll_vote_repository=poll_vote_repository,
            thread_repository=thread_repository,
            player_repository=player_repository,
            user_service=user_service,
            poll_settings=poll_settings,
            moderation_settings=moderation_settings,
        )

    @provide
    def get_content_service(
        self,
        reply_repository: ReplyRepository,
        player_comment_repository: PlayerCommentRepository,
    ) -> ContentService:
        """Provide reply/comment domain service."""
        return ContentService(
            reply_repository=reply_repository,
            player_comment_repository=player_comment_repository,
        )

    @provide
    def get_content_vote_service(
        self,
        vote_repository: VoteRepository,
        content_service: ContentService,
        user_service: UserService,
    ) -> ContentVoteService:
        """Provide reply/comment vote domain service."""
        return ContentVoteService(
            vote_repository=vote_repository,
            content_service=content_service,
            user_service=user_service,
        )

    @provide
    def get_moderation_service(
        self,
        content_service: ContentService,
        report_repository: ReportRepository,
        user_service: UserService,
        moderation_settings: ModerationSettings,
    ) -> ModerationService:
        """Provide moderation domain service."""
        return ModerationService(
            content_service=content_service,
            report_repository=report_repository,
            user_service=user_service,
            moderation_settings=moderation_settings,
        )
