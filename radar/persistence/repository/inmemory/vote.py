"""In-memory vote repository for testing."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from radar.domain.model.vote import Vote
from radar.domain.repository.vote import VoteRepository
from radar.domain.value import UserId, VotableType, VoteId, VoteType

from .common import UNIQUE_VIOLATION


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: list[Vote] = []

    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a vote by user and votable item."""
        for vote in self._votes:
            if (
                vote.user_id == user_id
                and vote.votable_type == votable_type
                and vote.votable_id == votable_id
            ):
                return vote
        return None

    async def save(self, vote: Vote) -> Vote:
        """Save a vote.

        Raises:
            IntegrityError: If vote already exists (duplicate)
        """
        # Check for duplicate
        existing = await self.find_by_user_and_votable(
            vote.user_id, vote.votable_type, vote.votable_id
        )
        if existing:
            raise IntegrityError(
                "INSERT INTO votes",
                None,
                Exception(UNIQUE_VIOLATION.format("unique_vote")),
            )

        self._votes.append(vote)
        return vote

    async def update_type(
        self, vote_id: VoteId, vote_type: VoteType, updated_at: datetime
    ) -> None:
        """Flip a vote's direction."""
        for i, vote in enumerate(self._votes):
            if vote.id == vote_id:
                self._votes[i] = vote.model_copy(
                    update={"vote_type": vote_type, "updated_at": updated_at}
                )
                return

    async def delete(self, vote_id: VoteId) -> None:
        """Delete a vote by ID."""
        self._votes = [v for v in self._votes if v.id != vote_id]

    async def count_by_votable(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        vote_type: VoteType,
    ) -> int:
        """Count votes of one direction for a votable item."""
        return sum(
            1
            for v in self._votes
            if v.votable_type == votable_type
            and v.votable_id == votable_id
            and v.vote_type == vote_type
        )
