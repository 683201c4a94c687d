"""Integration tests for the PostgreSQL repositories.

Requires a migrated database reachable at DATABASE__URL. Run with
``pytest -m integration``.
"""

from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from radar.domain.model import Poll, PollOption, PollVote
from radar.domain.repository import (
    PollRepository,
    PollVoteRepository,
    ReplyRepository,
    ThreadRepository,
    UserRepository,
)
from radar.domain.value import PollId, PollOptionId, PollVoteId
from tests.conftest import make_reply, make_thread, make_user
from tests.harness import create_env_fixture

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})

pytestmark = pytest.mark.integration


async def _poll_with_options(integration_env):
    user_repo = await integration_env.get(UserRepository)
    poll_repo = await integration_env.get(PollRepository)
    author = await user_repo.save(make_user())
    poll = Poll(id=PollId(uuid4()), author_id=author.id, question="Integration?")
    options = [
        PollOption(
            id=PollOptionId(uuid4()),
            poll_id=poll.id,
            option_text=text,
            display_order=index,
        )
        for index, text in enumerate(["Yes", "No"])
    ]
    await poll_repo.create(poll, options)
    return poll, options


def _vote(poll, option, voter_key: str) -> PollVote:
    return PollVote(
        id=PollVoteId(uuid4()),
        poll_id=poll.id,
        option_id=option.id,
        voter_key=voter_key,
        ip_address=voter_key.removeprefix("ip:"),
        is_anonymous=True,
    )


class TestPollVoteRepositoryIntegration:
    @pytest.mark.asyncio
    async def test_record_vote_moves_counters(self, integration_env):
        # Arrange
        poll_repo = await integration_env.get(PollRepository)
        vote_repo = await integration_env.get(PollVoteRepository)
        poll, (yes, no) = await _poll_with_options(integration_env)

        # Act
        await vote_repo.record_vote(_vote(poll, yes, "ip:203.0.113.1"))
        await vote_repo.record_vote(_vote(poll, yes, "ip:203.0.113.2"))
        await vote_repo.record_vote(_vote(poll, no, "ip:203.0.113.3"))

        # Assert
        stored = await poll_repo.find_by_id(poll.id)
        options = await poll_repo.find_options(poll.id)
        assert stored.total_votes == 3
        assert [o.vote_count for o in options] == [2, 1]
        assert await vote_repo.count_by_poll(poll.id) == 3
        assert await vote_repo.exists(poll.id, "ip:203.0.113.1") is True

    @pytest.mark.asyncio
    async def test_duplicate_voter_key_violates_unique_constraint(
        self, integration_env
    ):
        vote_repo = await integration_env.get(PollVoteRepository)
        poll, (yes, no) = await _poll_with_options(integration_env)
        await vote_repo.record_vote(_vote(poll, yes, "ip:198.51.100.9"))

        with pytest.raises(IntegrityError):
            await vote_repo.record_vote(_vote(poll, no, "ip:198.51.100.9"))

        # The failed flush aborts the transaction
        session = await integration_env.get(AsyncSession)
        await session.rollback()


class TestReplyRepositoryIntegration:
    @pytest.mark.asyncio
    async def test_vote_delta_never_goes_negative(self, integration_env):
        # Arrange
        user_repo = await integration_env.get(UserRepository)
        thread_repo = await integration_env.get(ThreadRepository)
        reply_repo = await integration_env.get(ReplyRepository)
        author = await user_repo.save(make_user())
        thread = await thread_repo.save(make_thread(author.id))
        reply = await reply_repo.save(make_reply(thread.id, author.id))

        # Act
        async with reply_repo.locked(reply.id) as locked:
            assert locked is not None
            bumped = await reply_repo.apply_vote_delta(reply.id, 1, 0)
        floored = await reply_repo.apply_vote_delta(reply.id, -5, -1)

        # Assert
        assert (bumped.upvotes, bumped.downvotes) == (1, 0)
        assert (floored.upvotes, floored.downvotes) == (0, 0)
