"""Unit tests for ContentVoteService."""

import asyncio
from uuid import uuid4

import pytest

from radar.domain.error import (
    AuthenticationRequiredError,
    NotFoundError,
    ValidationError,
)
from radar.domain.repository import (
    PlayerCommentRepository,
    ReplyRepository,
    UserRepository,
    VoteRepository,
)
from radar.domain.service import ContentVoteService
from radar.domain.service.content_vote_service import counter_delta
from radar.domain.value import (
    AnonymousIdentity,
    RegisteredIdentity,
    ThreadId,
    UserId,
    VotableType,
    VoteOutcome,
    VoteType,
)
from tests.conftest import make_comment, make_reply, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _seed_reply(unit_env):
    reply_repo = await unit_env.get(ReplyRepository)
    return await reply_repo.save(make_reply(ThreadId(uuid4()), UserId(uuid4())))


async def _voter(unit_env) -> RegisteredIdentity:
    user_repo = await unit_env.get(UserRepository)
    user = await user_repo.save(make_user())
    return RegisteredIdentity(user_id=user.id)


class TestCounterDelta:
    @pytest.mark.parametrize(
        "before, after, expected",
        [
            (None, VoteType.UPVOTE, (1, 0)),
            (None, VoteType.DOWNVOTE, (0, 1)),
            (VoteType.UPVOTE, None, (-1, 0)),
            (VoteType.DOWNVOTE, None, (0, -1)),
            (VoteType.UPVOTE, VoteType.DOWNVOTE, (-1, 1)),
            (VoteType.DOWNVOTE, VoteType.UPVOTE, (1, -1)),
            (None, None, (0, 0)),
        ],
    )
    def test_delta(self, before, after, expected):
        assert counter_delta(before, after) == expected


class TestToggleVoting:
    @pytest.mark.asyncio
    async def test_toggle_sequence(self, unit_env):
        """up casts, up again retracts, down casts, up flips."""
        # Arrange
        service = await unit_env.get(ContentVoteService)
        reply = await _seed_reply(unit_env)
        voter = await _voter(unit_env)

        # Act
        first = await service.vote(VotableType.REPLY, reply.id, voter, True)
        second = await service.vote(VotableType.REPLY, reply.id, voter, True)
        third = await service.vote(VotableType.REPLY, reply.id, voter, False)
        fourth = await service.vote(VotableType.REPLY, reply.id, voter, True)

        # Assert
        assert (first.outcome, first.upvotes, first.downvotes) == (
            VoteOutcome.CAST,
            1,
            0,
        )
        assert (second.outcome, second.upvotes, second.downvotes) == (
            VoteOutcome.RETRACTED,
            0,
            0,
        )
        assert second.vote_type is None
        assert (third.outcome, third.upvotes, third.downvotes) == (
            VoteOutcome.CAST,
            0,
            1,
        )
        assert third.net_score == -1
        assert (fourth.outcome, fourth.upvotes, fourth.downvotes) == (
            VoteOutcome.TOGGLED,
            1,
            0,
        )
        assert fourth.vote_type == VoteType.UPVOTE

    @pytest.mark.asyncio
    async def test_counters_match_ledger(self, unit_env):
        # Arrange
        service = await unit_env.get(ContentVoteService)
        vote_repo = await unit_env.get(VoteRepository)
        reply_repo = await unit_env.get(ReplyRepository)
        reply = await _seed_reply(unit_env)
        voters = [await _voter(unit_env) for _ in range(5)]

        # Act
        for voter in voters[:3]:
            await service.vote(VotableType.REPLY, reply.id, voter, True)
        for voter in voters[3:]:
            await service.vote(VotableType.REPLY, reply.id, voter, False)
        # One upvoter changes their mind
        await service.vote(VotableType.REPLY, reply.id, voters[0], False)

        # Assert
        stored = await reply_repo.find_by_id(reply.id)
        ups = await vote_repo.count_by_votable(
            VotableType.REPLY, reply.id, VoteType.UPVOTE
        )
        downs = await vote_repo.count_by_votable(
            VotableType.REPLY, reply.id, VoteType.DOWNVOTE
        )
        assert (stored.upvotes, stored.downvotes) == (ups, downs) == (2, 3)
        assert stored.net_score == -1

    @pytest.mark.asyncio
    async def test_votes_on_comments(self, unit_env):
        service = await unit_env.get(ContentVoteService)
        comment_repo = await unit_env.get(PlayerCommentRepository)
        comment = await comment_repo.save(make_comment(uuid4(), UserId(uuid4())))

        result = await service.vote(
            VotableType.PLAYER_COMMENT, comment.id, await _voter(unit_env), False
        )

        assert result.outcome == VoteOutcome.CAST
        assert result.downvotes == 1

    @pytest.mark.asyncio
    async def test_user_vote_lookup(self, unit_env):
        # Arrange
        service = await unit_env.get(ContentVoteService)
        first = await _seed_reply(unit_env)
        second = await _seed_reply(unit_env)
        untouched = await _seed_reply(unit_env)
        voter = await _voter(unit_env)
        await service.vote(VotableType.REPLY, first.id, voter, True)
        await service.vote(VotableType.REPLY, second.id, voter, False)

        # Act / Assert
        assert (
            await service.get_user_vote(VotableType.REPLY, first.id, voter.user_id)
            == VoteType.UPVOTE
        )
        assert (
            await service.get_user_vote(VotableType.REPLY, second.id, voter.user_id)
            == VoteType.DOWNVOTE
        )
        assert (
            await service.get_user_vote(VotableType.REPLY, untouched.id, voter.user_id)
            is None
        )


class TestVoteRejections:
    @pytest.mark.asyncio
    async def test_anonymous_callers_cannot_vote(self, unit_env):
        service = await unit_env.get(ContentVoteService)
        reply = await _seed_reply(unit_env)

        with pytest.raises(AuthenticationRequiredError):
            await service.vote(
                VotableType.REPLY,
                reply.id,
                AnonymousIdentity(ip_address="203.0.113.5"),
                True,
            )

    @pytest.mark.asyncio
    async def test_unknown_user_cannot_vote(self, unit_env):
        # Arrange
        service = await unit_env.get(ContentVoteService)
        reply_repo = await unit_env.get(ReplyRepository)
        vote_repo = await unit_env.get(VoteRepository)
        reply = await _seed_reply(unit_env)
        ghost = RegisteredIdentity(user_id=UserId(uuid4()))

        # Act / Assert
        with pytest.raises(NotFoundError, match="User"):
            await service.vote(VotableType.REPLY, reply.id, ghost, True)

        stored = await reply_repo.find_by_id(reply.id)
        assert stored.upvotes == 0
        assert (
            await vote_repo.find_by_user_and_votable(
                ghost.user_id, VotableType.REPLY, reply.id
            )
            is None
        )

    @pytest.mark.asyncio
    async def test_unknown_reply(self, unit_env):
        service = await unit_env.get(ContentVoteService)

        with pytest.raises(NotFoundError, match="Reply"):
            await service.vote(
                VotableType.REPLY, uuid4(), await _voter(unit_env), True
            )

    @pytest.mark.asyncio
    async def test_deleted_reply_refuses_votes(self, unit_env):
        # Arrange
        service = await unit_env.get(ContentVoteService)
        reply_repo = await unit_env.get(ReplyRepository)
        reply = await _seed_reply(unit_env)
        await reply_repo.save(reply.model_copy(update={"is_deleted": True}))

        # Act / Assert
        with pytest.raises(ValidationError, match="deleted"):
            await service.vote(
                VotableType.REPLY, reply.id, await _voter(unit_env), True
            )


class TestConcurrentContentVotes:
    @pytest.mark.asyncio
    async def test_many_voters_at_once(self, unit_env):
        service = await unit_env.get(ContentVoteService)
        reply_repo = await unit_env.get(ReplyRepository)
        reply = await _seed_reply(unit_env)
        voters = [await _voter(unit_env) for _ in range(20)]

        await asyncio.gather(
            *(
                service.vote(VotableType.REPLY, reply.id, voter, n % 4 != 0)
                for n, voter in enumerate(voters)
            )
        )

        stored = await reply_repo.find_by_id(reply.id)
        assert (stored.upvotes, stored.downvotes) == (15, 5)

    @pytest.mark.asyncio
    async def test_same_voter_repeated_clicks_stay_consistent(self, unit_env):
        """An even number of identical clicks ends with no vote."""
        service = await unit_env.get(ContentVoteService)
        vote_repo = await unit_env.get(VoteRepository)
        reply_repo = await unit_env.get(ReplyRepository)
        reply = await _seed_reply(unit_env)
        voter = await _voter(unit_env)

        await asyncio.gather(
            *(service.vote(VotableType.REPLY, reply.id, voter, True) for _ in range(6))
        )

        stored = await reply_repo.find_by_id(reply.id)
        assert stored.upvotes == 0
        assert (
            await vote_repo.find_by_user_and_votable(
                voter.user_id, VotableType.REPLY, reply.id
            )
            is None
        )
