"""Unit tests for ModerationService."""

from uuid import uuid4

import pytest

from radar.domain.error import AuthorizationError, NotFoundError, ValidationError
from radar.domain.repository import ReplyRepository, ReportRepository, UserRepository
from radar.domain.service import ContentVoteService, ModerationService
from radar.domain.value import (
    RegisteredIdentity,
    ThreadId,
    UserRole,
    VotableType,
)
from tests.conftest import make_reply, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _seed(unit_env, **author_kwargs):
    user_repo = await unit_env.get(UserRepository)
    reply_repo = await unit_env.get(ReplyRepository)
    author = await user_repo.save(make_user(**author_kwargs))
    reply = await reply_repo.save(make_reply(ThreadId(uuid4()), author.id))
    return author, reply


async def _user(unit_env, **kwargs):
    user_repo = await unit_env.get(UserRepository)
    return await user_repo.save(make_user(**kwargs))


class TestReport:
    @pytest.mark.asyncio
    async def test_records_report(self, unit_env):
        # Arrange
        service = await unit_env.get(ModerationService)
        report_repo = await unit_env.get(ReportRepository)
        _, reply = await _seed(unit_env)
        reporter = await _user(unit_env)

        # Act
        report = await service.report(
            VotableType.REPLY, reply.id, reporter.id, "  Spam link  "
        )

        # Assert
        assert report.reason == "Spam link"
        assert await report_repo.find_by_votable(VotableType.REPLY, reply.id) == [report]

    @pytest.mark.asyncio
    async def test_blank_reason_rejected(self, unit_env):
        service = await unit_env.get(ModerationService)
        _, reply = await _seed(unit_env)
        reporter = await _user(unit_env)

        with pytest.raises(ValidationError, match="required"):
            await service.report(VotableType.REPLY, reply.id, reporter.id, "  ")

    @pytest.mark.asyncio
    async def test_overlong_reason_rejected(self, unit_env):
        service = await unit_env.get(ModerationService)
        _, reply = await _seed(unit_env)
        reporter = await _user(unit_env)

        with pytest.raises(ValidationError, match="500"):
            await service.report(VotableType.REPLY, reply.id, reporter.id, "x" * 501)

    @pytest.mark.asyncio
    async def test_unknown_target(self, unit_env):
        service = await unit_env.get(ModerationService)
        reporter = await _user(unit_env)

        with pytest.raises(NotFoundError):
            await service.report(VotableType.REPLY, uuid4(), reporter.id, "Spam")


class TestFeature:
    @pytest.mark.asyncio
    async def test_moderator_features_and_unfeatures(self, unit_env):
        service = await unit_env.get(ModerationService)
        _, reply = await _seed(unit_env)
        coach = await _user(unit_env, role=UserRole.COACH)

        featured = await service.feature(VotableType.REPLY, reply.id, coach.id)
        unfeatured = await service.unfeature(VotableType.REPLY, reply.id, coach.id)

        assert featured.is_featured is True
        assert unfeatured.is_featured is False

    @pytest.mark.asyncio
    async def test_plain_user_cannot_feature(self, unit_env):
        service = await unit_env.get(ModerationService)
        author, reply = await _seed(unit_env)

        # Even the author needs moderation rights
        with pytest.raises(AuthorizationError, match="Moderator"):
            await service.feature(VotableType.REPLY, reply.id, author.id)

    @pytest.mark.asyncio
    async def test_low_reputation_scout_cannot_feature(self, unit_env):
        service = await unit_env.get(ModerationService)
        _, reply = await _seed(unit_env)
        scout = await _user(unit_env, role=UserRole.SCOUT, reputation_score=3)

        with pytest.raises(AuthorizationError):
            await service.feature(VotableType.REPLY, reply.id, scout.id)


class TestDelete:
    @pytest.mark.asyncio
    async def test_author_soft_deletes_and_counters_survive(self, unit_env):
        # Arrange
        service = await unit_env.get(ModerationService)
        vote_service = await unit_env.get(ContentVoteService)
        author, reply = await _seed(unit_env)
        fan = await _user(unit_env)
        await vote_service.vote(
            VotableType.REPLY,
            reply.id,
            RegisteredIdentity(user_id=fan.id),
            True,
        )

        # Act
        deleted = await service.delete(VotableType.REPLY, reply.id, author.id)

        # Assert
        assert deleted.is_deleted is True
        assert deleted.deleted_at is not None
        assert deleted.upvotes == 1

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, unit_env):
        service = await unit_env.get(ModerationService)
        author, reply = await _seed(unit_env)

        first = await service.delete(VotableType.REPLY, reply.id, author.id)
        second = await service.delete(VotableType.REPLY, reply.id, author.id)

        assert second.is_deleted is True
        assert second.deleted_at == first.deleted_at

    @pytest.mark.asyncio
    async def test_admin_deletes_others_content(self, unit_env):
        service = await unit_env.get(ModerationService)
        _, reply = await _seed(unit_env)
        admin = await _user(unit_env, role=UserRole.ADMIN)

        deleted = await service.delete(VotableType.REPLY, reply.id, admin.id)

        assert deleted.is_deleted is True

    @pytest.mark.asyncio
    async def test_stranger_cannot_delete(self, unit_env):
        service = await unit_env.get(ModerationService)
        _, reply = await _seed(unit_env)
        stranger = await _user(unit_env)

        with pytest.raises(AuthorizationError):
            await service.delete(VotableType.REPLY, reply.id, stranger.id)
