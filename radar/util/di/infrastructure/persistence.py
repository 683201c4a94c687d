"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from radar.config import Settings
from radar.domain.repository import (
    PlayerCommentRepository,
    PlayerRepository,
    PollRepository,
    PollVoteRepository,
    ReplyRepository,
    ReportRepository,
    ThreadRepository,
    UnitOfWork,
    UserRepository,
    VoteRepository,
)
from radar.persistence.database import create_engine, create_session_factory
from radar.persistence.repository import (
    PostgresPlayerCommentRepository,
    PostgresPlayerRepository,
    PostgresPollRepository,
    PostgresPollVoteRepository,
    PostgresReplyRepository,
    PostgresReportRepository,
    PostgresThreadRepository,
    PostgresUserRepository,
    PostgresVoteRepository,
)
from radar.persistence.unit_of_work import SessionUnitOfWork
from radar.util.di.base import ProviderBase
from radar.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        Writes are committed by the UnitOfWork. Anything still uncommitted
        when the request ends is rolled back as the session closes.
        """
        async with session_factory() as session:
            yield session

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self, session: AsyncSession) -> UnitOfWork:
        """Provide the unit of work bound to the request session."""
        return SessionUnitOfWork(session)

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_thread_repository(self, session: AsyncSession) -> ThreadRepository:
        """Provide Thread repository."""
        return PostgresThreadRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_player_repository(self, session: AsyncSession) -> PlayerRepository:
        """Provide Player repository."""
        return PostgresPlayerRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_poll_repository(self, session: AsyncSession) -> PollRepository:
        """Provide Poll repository."""
        return PostgresPollRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_poll_vote_repository(self, session: AsyncSession) -> PollVoteRepository:
        """Provide PollVote repository."""
        return PostgresPollVoteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_reply_repository(self, session: AsyncSession) -> ReplyRepository:
        """Provide Reply repository."""
        return PostgresReplyRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_player_comment_repository(
        self, session: AsyncSession
    ) -> PlayerCommentRepository:
        """Provide PlayerComment repository."""
        return PostgresPlayerCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, session: AsyncSession) -> VoteRepository:
        """Provide Vote repository."""
        return PostgresVoteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_report_repository(self, session: AsyncSession) -> ReportRepository:
        """Provide ContentReport repository."""
        return PostgresReportRepository(session)
