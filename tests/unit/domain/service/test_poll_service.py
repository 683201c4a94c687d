"""Unit tests for PollService."""

import asyncio
from datetime import timedelta
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from radar.domain.error import (
    AuthorizationError,
    DuplicateVoteError,
    InvalidOptionError,
    NotFoundError,
    PollClosedError,
    ValidationError,
)
from radar.domain.model import Poll, PollOption
from radar.domain.model.common import utcnow
from radar.domain.repository import (
    PlayerRepository,
    PollRepository,
    PollVoteRepository,
    UserRepository,
)
from radar.domain.service import PollService
from radar.domain.service.poll_service import calculate_percentage, pick_winner
from radar.domain.value import (
    AnonymousIdentity,
    PlayerId,
    PollId,
    PollOptionId,
    PollType,
    RegisteredIdentity,
    UserId,
    UserRole,
)
from tests.conftest import make_player, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _create_author(unit_env, **kwargs):
    user_repo = await unit_env.get(UserRepository)
    return await user_repo.save(make_user(**kwargs))


async def _create_poll(unit_env, options=("Yes", "No", "Maybe"), **kwargs):
    poll_service = await unit_env.get(PollService)
    author = await _create_author(unit_env)
    poll = await poll_service.create_poll(
        author_id=author.id,
        question="Will he start next season?",
        option_texts=list(options),
        **kwargs,
    )
    return poll, await poll_service.get_options(poll.id), author


def _anonymous(n: int) -> AnonymousIdentity:
    return AnonymousIdentity(ip_address=f"203.0.113.{n}")


class TestPollHelpers:
    def test_percentage_of_zero_total_is_zero(self):
        assert calculate_percentage(0, 0) == 0.0

    def test_percentage(self):
        assert calculate_percentage(1, 4) == 25.0

    def test_no_winner_without_votes(self):
        option = PollOption(
            id=PollOptionId(uuid4()), poll_id=PollId(uuid4()), option_text="A"
        )
        assert pick_winner([option]) is None

    def test_tie_goes_to_lowest_display_order(self):
        poll_id = PollId(uuid4())
        first = PollOption(
            id=PollOptionId(uuid4()),
            poll_id=poll_id,
            option_text="A",
            vote_count=3,
            display_order=0,
        )
        second = PollOption(
            id=PollOptionId(uuid4()),
            poll_id=poll_id,
            option_text="B",
            vote_count=3,
            display_order=1,
        )

        assert pick_winner([second, first]) == first


class TestCreatePoll:
    @pytest.mark.asyncio
    async def test_creates_poll_with_ordered_options(self, unit_env):
        # Act
        poll, options, author = await _create_poll(unit_env)

        # Assert
        assert poll.author_id == author.id
        assert poll.is_active is True
        assert poll.total_votes == 0
        assert [o.option_text for o in options] == ["Yes", "No", "Maybe"]
        assert [o.display_order for o in options] == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_rejects_single_option(self, unit_env):
        with pytest.raises(ValidationError, match="at least 2"):
            await _create_poll(unit_env, options=("Only",))

    @pytest.mark.asyncio
    async def test_rejects_too_many_options(self, unit_env):
        with pytest.raises(ValidationError, match="more than 10"):
            await _create_poll(unit_env, options=[f"Option {i}" for i in range(11)])

    @pytest.mark.asyncio
    async def test_rejects_blank_option(self, unit_env):
        with pytest.raises(ValidationError, match="blank"):
            await _create_poll(unit_env, options=("Yes", "   "))

    @pytest.mark.asyncio
    async def test_yes_no_poll_needs_two_options(self, unit_env):
        with pytest.raises(ValidationError, match="exactly 2"):
            await _create_poll(
                unit_env, options=("Yes", "No", "Maybe"), poll_type=PollType.YES_NO
            )

    @pytest.mark.asyncio
    async def test_rejects_past_expiry(self, unit_env):
        with pytest.raises(ValidationError, match="future"):
            await _create_poll(unit_env, expires_at=utcnow() - timedelta(hours=1))

    @pytest.mark.asyncio
    async def test_rejects_unknown_player(self, unit_env):
        with pytest.raises(NotFoundError, match="Player"):
            await _create_poll(unit_env, player_id=PlayerId(uuid4()))

    @pytest.mark.asyncio
    async def test_attaches_to_existing_player(self, unit_env):
        # Arrange
        player_repo = await unit_env.get(PlayerRepository)
        player = await player_repo.save(make_player())
        poll_service = await unit_env.get(PollService)

        # Act
        poll, _, _ = await _create_poll(unit_env, player_id=player.id)

        # Assert
        assert [p.id for p in await poll_service.list_by_player(player.id)] == [poll.id]


class TestVote:
    @pytest.mark.asyncio
    async def test_results_reflect_votes(self, unit_env):
        """3 votes for A and 1 for B give 75/25/0."""
        # Arrange
        poll_service = await unit_env.get(PollService)
        poll, options, _ = await _create_poll(unit_env)
        a, b, _c = options

        # Act
        for n in range(3):
            await poll_service.vote(poll.id, a.id, _anonymous(n))
        await poll_service.vote(poll.id, b.id, _anonymous(3))
        results = await poll_service.get_results(poll.id)

        # Assert
        assert results.total_votes == 4
        assert [r.count for r in results.options] == [3, 1, 0]
        assert [r.percentage for r in results.options] == [75.0, 25.0, 0.0]
        assert [r.is_winning for r in results.options] == [True, False, False]

    @pytest.mark.asyncio
    async def test_results_without_votes_are_zero(self, unit_env):
        poll_service = await unit_env.get(PollService)
        poll, _, _ = await _create_poll(unit_env)

        results = await poll_service.get_results(poll.id)

        assert results.total_votes == 0
        assert all(r.percentage == 0.0 for r in results.options)
        assert not any(r.is_winning for r in results.options)
        assert await poll_service.get_winning_option(poll.id) is None

    @pytest.mark.asyncio
    async def test_unknown_user_cannot_vote(self, unit_env):
        # Arrange
        poll_service = await unit_env.get(PollService)
        poll, options, _ = await _create_poll(unit_env)
        ghost = RegisteredIdentity(user_id=UserId(uuid4()))

        # Act / Assert
        with pytest.raises(NotFoundError, match="User"):
            await poll_service.vote(poll.id, options[0].id, ghost)

        assert (await poll_service.get_poll(poll.id)).total_votes == 0
        assert await poll_service.has_voted(poll.id, ghost) is False

    @pytest.mark.asyncio
    async def test_other_integrity_errors_are_not_duplicates(
        self, unit_env, monkeypatch
    ):
        # Arrange
        poll_service = await unit_env.get(PollService)
        poll, options, _ = await _create_poll(unit_env)

        async def failing_record(vote):
            raise IntegrityError(
                "INSERT INTO poll_votes",
                None,
                Exception(
                    'insert or update on table "poll_votes" violates foreign key '
                    'constraint "poll_votes_option_id_fkey"'
                ),
            )

        monkeypatch.setattr(
            poll_service.poll_vote_repository, "record_vote", failing_record
        )

        # Act / Assert
        with pytest.raises(IntegrityError):
            await poll_service.vote(
                poll.id, options[0].id, AnonymousIdentity(ip_address="203.0.113.7")
            )

    @pytest.mark.asyncio
    async def test_registered_user_cannot_vote_twice(self, unit_env):
        # Arrange
        poll_service = await unit_env.get(PollService)
        poll, options, _ = await _create_poll(unit_env)
        voter = await _create_author(unit_env)
        identity = RegisteredIdentity(user_id=voter.id)
        await poll_service.vote(poll.id, options[0].id, identity)

        # Act / Assert
        with pytest.raises(DuplicateVoteError):
            await poll_service.vote(poll.id, options[1].id, identity)

        results = await poll_service.get_results(poll.id)
        assert results.total_votes == 1

    @pytest.mark.asyncio
    async def test_anonymous_votes_deduplicated_by_ip(self, unit_env):
        poll_service = await unit_env.get(PollService)
        poll, options, _ = await _create_poll(unit_env)

        await poll_service.vote(
            poll.id, options[0].id, AnonymousIdentity(ip_address="198.51.100.7")
        )

        # Same address, different browser
        with pytest.raises(DuplicateVoteError):
            await poll_service.vote(
                poll.id,
                options[1].id,
                AnonymousIdentity(ip_address="198.51.100.7", user_agent="Other/1.0"),
            )

    @pytest.mark.asyncio
    async def test_registered_vote_records_user(self, unit_env):
        poll_service = await unit_env.get(PollService)
        poll, options, _ = await _create_poll(unit_env)
        voter = await _create_author(unit_env)

        vote = await poll_service.vote(
            poll.id, options[0].id, RegisteredIdentity(user_id=voter.id)
        )

        assert vote.user_id == voter.id
        assert vote.is_anonymous is False
        assert vote.ip_address is None

    @pytest.mark.asyncio
    async def test_anonymous_poll_withholds_user_id(self, unit_env):
        # Arrange
        poll_service = await unit_env.get(PollService)
        poll, options, _ = await _create_poll(unit_env, is_anonymous=True)
        voter = await _create_author(unit_env)
        identity = RegisteredIdentity(user_id=voter.id)

        # Act
        vote = await poll_service.vote(poll.id, options[0].id, identity)

        # Assert
        assert vote.user_id is None
        assert vote.is_anonymous is True
        assert vote.voter_key == identity.voter_key
        assert await poll_service.has_voted(poll.id, identity) is True

    @pytest.mark.asyncio
    async def test_anonymous_vote_keeps_client_details(self, unit_env):
        poll_service = await unit_env.get(PollService)
        poll, options, _ = await _create_poll(unit_env)
        identity = AnonymousIdentity(ip_address="192.0.2.10", user_agent="Mozilla/5.0")

        vote = await poll_service.vote(poll.id, options[2].id, identity)

        assert vote.ip_address == "192.0.2.10"
        assert vote.user_agent == "Mozilla/5.0"
        assert vote.is_anonymous is True
        assert await poll_service.get_voted_option_ids(poll.id, identity) == [
            options[2].id
        ]

    @pytest.mark.asyncio
    async def test_unknown_poll(self, unit_env):
        poll_service = await unit_env.get(PollService)

        with pytest.raises(NotFoundError, match="Poll"):
            await poll_service.vote(
                PollId(uuid4()), PollOptionId(uuid4()), _anonymous(1)
            )

    @pytest.mark.asyncio
    async def test_unknown_option(self, unit_env):
        poll_service = await unit_env.get(PollService)
        poll, _, _ = await _create_poll(unit_env)

        with pytest.raises(NotFoundError, match="Poll option"):
            await poll_service.vote(poll.id, PollOptionId(uuid4()), _anonymous(1))

    @pytest.mark.asyncio
    async def test_option_from_other_poll(self, unit_env):
        # Arrange
        poll_service = await unit_env.get(PollService)
        poll, _, _ = await _create_poll(unit_env)
        _other, other_options, _ = await _create_poll(unit_env)

        # Act / Assert
        with pytest.raises(InvalidOptionError):
            await poll_service.vote(poll.id, other_options[0].id, _anonymous(1))

        results = await poll_service.get_results(poll.id)
        assert results.total_votes == 0

    @pytest.mark.asyncio
    async def test_closed_poll_refuses_votes(self, unit_env):
        poll_service = await unit_env.get(PollService)
        poll, options, author = await _create_poll(unit_env)
        await poll_service.close_poll(poll.id, author.id)

        with pytest.raises(PollClosedError):
            await poll_service.vote(poll.id, options[0].id, _anonymous(1))

    @pytest.mark.asyncio
    async def test_expired_poll_refuses_votes_while_still_active(self, unit_env):
        """A poll past expiry is closed even if nothing deactivated it yet."""
        # Arrange
        poll_repo = await unit_env.get(PollRepository)
        poll_service = await unit_env.get(PollService)
        author = await _create_author(unit_env)
        poll = Poll(
            id=PollId(uuid4()),
            author_id=author.id,
            question="Expired?",
            is_active=True,
            expires_at=utcnow() - timedelta(minutes=5),
        )
        option = PollOption(id=PollOptionId(uuid4()), poll_id=poll.id, option_text="A")
        await poll_repo.create(poll, [option])

        # Act / Assert
        with pytest.raises(PollClosedError):
            await poll_service.vote(poll.id, option.id, _anonymous(1))


class TestConcurrentVoting:
    @pytest.mark.asyncio
    async def test_fifty_concurrent_voters_all_counted(self, unit_env):
        # Arrange
        poll_service = await unit_env.get(PollService)
        poll_vote_repo = await unit_env.get(PollVoteRepository)
        poll, options, _ = await _create_poll(unit_env)

        # Act
        await asyncio.gather(
            *(
                poll_service.vote(poll.id, options[n % 3].id, _anonymous(n))
                for n in range(50)
            )
        )

        # Assert
        results = await poll_service.get_results(poll.id)
        assert results.total_votes == 50
        assert sum(r.count for r in results.options) == 50
        assert await poll_vote_repo.count_by_poll(poll.id) == 50

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_votes_count_once(self, unit_env):
        # Arrange
        poll_service = await unit_env.get(PollService)
        poll, options, _ = await _create_poll(unit_env)
        identity = AnonymousIdentity(ip_address="198.51.100.42")

        # Act
        outcomes = await asyncio.gather(
            *(poll_service.vote(poll.id, options[0].id, identity) for _ in range(10)),
            return_exceptions=True,
        )

        # Assert
        errors = [o for o in outcomes if isinstance(o, Exception)]
        assert len(outcomes) - len(errors) == 1
        assert all(isinstance(e, DuplicateVoteError) for e in errors)
        results = await poll_service.get_results(poll.id)
        assert results.total_votes == 1


class TestClosePoll:
    @pytest.mark.asyncio
    async def test_author_closes_poll(self, unit_env):
        poll_service = await unit_env.get(PollService)
        poll, _, author = await _create_poll(unit_env)

        closed = await poll_service.close_poll(poll.id, author.id)

        assert closed.is_active is False
        assert (await poll_service.get_poll(poll.id)).is_active is False

    @pytest.mark.asyncio
    async def test_closing_twice_is_noop(self, unit_env):
        poll_service = await unit_env.get(PollService)
        poll, _, author = await _create_poll(unit_env)

        await poll_service.close_poll(poll.id, author.id)
        closed = await poll_service.close_poll(poll.id, author.id)

        assert closed.is_active is False

    @pytest.mark.asyncio
    async def test_stranger_cannot_close(self, unit_env):
        poll_service = await unit_env.get(PollService)
        poll, _, _ = await _create_poll(unit_env)
        stranger = await _create_author(unit_env)

        with pytest.raises(AuthorizationError):
            await poll_service.close_poll(poll.id, stranger.id)

    @pytest.mark.asyncio
    async def test_trusted_scout_can_close(self, unit_env):
        poll_service = await unit_env.get(PollService)
        poll, _, _ = await _create_poll(unit_env)
        scout = await _create_author(unit_env, role=UserRole.SCOUT, reputation_score=30)

        closed = await poll_service.close_poll(poll.id, scout.id)

        assert closed.is_active is False

    @pytest.mark.asyncio
    async def test_votes_survive_closing(self, unit_env):
        poll_service = await unit_env.get(PollService)
        poll, options, author = await _create_poll(unit_env)
        await poll_service.vote(poll.id, options[1].id, _anonymous(1))

        await poll_service.close_poll(poll.id, author.id)
        results = await poll_service.get_results(poll.id)

        assert results.total_votes == 1
        assert results.options[1].is_winning is True


class TestExpirePolls:
    @pytest.mark.asyncio
    async def test_deactivates_only_expired_polls(self, unit_env):
        # Arrange
        poll_service = await unit_env.get(PollService)
        expiring, _, _ = await _create_poll(
            unit_env, expires_at=utcnow() + timedelta(hours=1)
        )
        open_ended, _, _ = await _create_poll(unit_env)

        # Act
        count = await poll_service.expire_polls(now=utcnow() + timedelta(hours=2))

        # Assert
        assert count == 1
        assert (await poll_service.get_poll(expiring.id)).is_active is False
        assert (await poll_service.get_poll(open_ended.id)).is_active is True

    @pytest.mark.asyncio
    async def test_list_active_excludes_closed(self, unit_env):
        poll_service = await unit_env.get(PollService)
        open_poll, _, _ = await _create_poll(unit_env)
        closed_poll, _, author = await _create_poll(unit_env)
        await poll_service.close_poll(closed_poll.id, author.id)

        active = await poll_service.list_active()

        assert [p.id for p in active] == [open_poll.id]
