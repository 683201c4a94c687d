"""In-memory poll repositories for testing.

Counter updates happen without awaiting in between, so concurrent
coroutines on one event loop cannot interleave inside a single update.
"""

from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy.exc import IntegrityError

from radar.domain.model.common import as_utc
from radar.domain.model.poll import Poll, PollOption
from radar.domain.model.poll_vote import PollVote
from radar.domain.repository.poll import PollRepository, PollVoteRepository
from radar.domain.value import PlayerId, PollId, PollOptionId, ThreadId

from .common import UNIQUE_VIOLATION


class InMemoryPollRepository(PollRepository):
    """In-memory implementation of PollRepository for testing."""

    def __init__(self) -> None:
        self._polls: dict[PollId, Poll] = {}
        self._options: dict[PollOptionId, PollOption] = {}

    async def create(self, poll: Poll, options: Sequence[PollOption]) -> Poll:
        """Save a poll and its options."""
        if poll.id in self._polls:
            raise IntegrityError(
                "INSERT INTO polls", None, Exception(UNIQUE_VIOLATION.format("polls_pkey"))
            )
        self._polls[poll.id] = poll
        for option in options:
            self._options[option.id] = option
        return poll

    async def find_by_id(self, poll_id: PollId) -> Optional[Poll]:
        """Find a poll by ID."""
        return self._polls.get(poll_id)

    async def find_options(self, poll_id: PollId) -> List[PollOption]:
        """Find a poll's options in display order."""
        options = [o for o in self._options.values() if o.poll_id == poll_id]
        options.sort(key=lambda o: o.display_order)
        return options

    async def find_option_by_id(self, option_id: PollOptionId) -> Optional[PollOption]:
        """Find an option by ID."""
        return self._options.get(option_id)

    async def set_active(
        self, poll_id: PollId, is_active: bool, updated_at: datetime
    ) -> None:
        """Set the active flag on a poll."""
        poll = self._polls.get(poll_id)
        if poll:
            self._polls[poll_id] = poll.model_copy(
                update={"is_active": is_active, "updated_at": updated_at}
            )

    async def deactivate_expired(self, now: datetime) -> int:
        """Deactivate active polls past their expiry."""
        count = 0
        for poll in list(self._polls.values()):
            if poll.is_active and poll.is_expired(now):
                self._polls[poll.id] = poll.model_copy(
                    update={"is_active": False, "updated_at": now}
                )
                count += 1
        return count

    async def find_active(self, now: datetime, limit: int = 20) -> List[Poll]:
        """Find polls still accepting votes, newest first."""
        polls = [p for p in self._polls.values() if p.accepts_votes(now)]
        return self._newest_first(polls)[:limit]

    async def find_by_player(self, player_id: PlayerId, limit: int = 20) -> List[Poll]:
        """Find polls attached to a player, newest first."""
        polls = [p for p in self._polls.values() if p.player_id == player_id]
        return self._newest_first(polls)[:limit]

    async def find_by_thread(self, thread_id: ThreadId, limit: int = 20) -> List[Poll]:
        """Find polls attached to a thread, newest first."""
        polls = [p for p in self._polls.values() if p.thread_id == thread_id]
        return self._newest_first(polls)[:limit]

    def increment_counts(self, poll_id: PollId, option_id: PollOptionId) -> None:
        """Add one vote to an option and its poll."""
        poll = self._polls[poll_id]
        option = self._options[option_id]
        self._options[option_id] = option.model_copy(
            update={"vote_count": option.vote_count + 1}
        )
        self._polls[poll_id] = poll.model_copy(
            update={"total_votes": poll.total_votes + 1}
        )

    @staticmethod
    def _newest_first(polls: List[Poll]) -> List[Poll]:
        return sorted(polls, key=lambda p: as_utc(p.created_at), reverse=True)


class InMemoryPollVoteRepository(PollVoteRepository):
    """In-memory implementation of PollVoteRepository for testing.

    Shares state with an InMemoryPollRepository so that recording a vote
    moves the counters the same way the database implementation does.
    """

    def __init__(self, poll_repository: InMemoryPollRepository) -> None:
        self._polls = poll_repository
        self._votes: list[PollVote] = []

    async def record_vote(self, vote: PollVote) -> PollVote:
        """Insert a vote and bump counters.

        Raises:
            IntegrityError: If the voter already voted on this poll
        """
        # Check for duplicate
        for existing in self._votes:
            if existing.poll_id == vote.poll_id and existing.voter_key == vote.voter_key:
                raise IntegrityError(
                    "INSERT INTO poll_votes",
                    None,
                    Exception(UNIQUE_VIOLATION.format("unique_poll_vote")),
                )

        self._votes.append(vote)
        self._polls.increment_counts(vote.poll_id, vote.option_id)
        return vote

    async def exists(self, poll_id: PollId, voter_key: str) -> bool:
        """Check whether a voter has voted on a poll."""
        return any(
            v.poll_id == poll_id and v.voter_key == voter_key for v in self._votes
        )

    async def find_by_voter(self, poll_id: PollId, voter_key: str) -> List[PollVote]:
        """Find a voter's votes on a poll."""
        return [
            v for v in self._votes if v.poll_id == poll_id and v.voter_key == voter_key
        ]

    async def count_by_poll(self, poll_id: PollId) -> int:
        """Count votes on a poll."""
        return sum(1 for v in self._votes if v.poll_id == poll_id)
