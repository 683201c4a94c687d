"""Poll repository interfaces."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence

from radar.domain.model.poll import Poll, PollOption
from radar.domain.model.poll_vote import PollVote
from radar.domain.value import PlayerId, PollId, PollOptionId, ThreadId


class PollRepository(ABC):
    """Repository for the Poll aggregate and its options.

    Defines the contract for poll persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def create(self, poll: Poll, options: Sequence[PollOption]) -> Poll:
        """Persist a new poll together with its options.

        Args:
            poll: The poll to create
            options: Its options, already carrying display order

        Returns:
            The created poll
        """
        pass

    @abstractmethod
    async def find_by_id(self, poll_id: PollId) -> Optional[Poll]:
        """Find a poll by ID.

        Args:
            poll_id: The poll's unique identifier

        Returns:
            The poll if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_options(self, poll_id: PollId) -> List[PollOption]:
        """Find a poll's options ordered by display order.

        Args:
            poll_id: The poll's unique identifier

        Returns:
            Options in display order (empty if the poll does not exist)
        """
        pass

    @abstractmethod
    async def find_option_by_id(self, option_id: PollOptionId) -> Optional[PollOption]:
        """Find a single option by ID."""
        pass

    @abstractmethod
    async def set_active(
        self, poll_id: PollId, is_active: bool, updated_at: datetime
    ) -> None:
        """Set the active flag on a poll."""
        pass

    @abstractmethod
    async def deactivate_expired(self, now: datetime) -> int:
        """Deactivate every active poll whose expiry is before ``now``.

        Returns:
            Number of polls deactivated
        """
        pass

    @abstractmethod
    async def find_active(self, now: datetime, limit: int = 20) -> List[Poll]:
        """Find polls still accepting votes, newest first."""
        pass

    @abstractmethod
    async def find_by_player(self, player_id: PlayerId, limit: int = 20) -> List[Poll]:
        """Find polls attached to a player, newest first."""
        pass

    @abstractmethod
    async def find_by_thread(self, thread_id: ThreadId, limit: int = 20) -> List[Poll]:
        """Find polls attached to a discussion thread, newest first."""
        pass


class PollVoteRepository(ABC):
    """Ledger of poll votes.

    ``record_vote`` is the only way to add a vote, and it moves the option and
    poll counters in the same unit of work.
    """

    @abstractmethod
    async def record_vote(self, vote: PollVote) -> PollVote:
        """Insert a vote and increment its option and poll counters by one.

        Args:
            vote: The vote to record

        Returns:
            The recorded vote

        Raises:
            IntegrityError: If the voter already has a vote on this poll
        """
        pass

    @abstractmethod
    async def exists(self, poll_id: PollId, voter_key: str) -> bool:
        """Check whether a voter has a vote on a poll."""
        pass

    @abstractmethod
    async def find_by_voter(self, poll_id: PollId, voter_key: str) -> List[PollVote]:
        """Find a voter's votes on a poll (at most one today)."""
        pass

    @abstractmethod
    async def count_by_poll(self, poll_id: PollId) -> int:
        """Count votes on a poll straight from the ledger."""
        pass
