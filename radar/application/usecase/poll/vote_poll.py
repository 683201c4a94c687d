"""Vote on poll use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from radar.domain.repository import UnitOfWork
from radar.domain.service import PollService
from radar.domain.value import Identity, PollId, PollOptionId

from ..base import BaseUseCase
from .get_poll_results import PollResultsResponse, results_to_response


class VotePollRequest(BaseModel):
    """Vote on poll request."""

    poll_id: str  # UUID string
    option_id: str  # UUID string
    identity: Identity


class VotePollResponse(BaseModel):
    """Vote on poll response, with results after the vote."""

    vote_id: str
    poll_id: str
    option_id: str
    created_at: datetime
    results: PollResultsResponse


class VotePollUseCase(BaseUseCase):
    """Use case for voting on a poll option."""

    def __init__(
        self, poll_service: PollService, unit_of_work: UnitOfWork
    ) -> None:
        """Initialize vote poll use case.

        Args:
            poll_service: Poll domain service
            unit_of_work: Transaction boundary for the writes
        """
        self.poll_service = poll_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: VotePollRequest) -> VotePollResponse:
        """Execute vote flow.

        Raises:
            NotFoundError: If poll or option not found
            PollClosedError: If poll no longer accepts votes
            InvalidOptionError: If the option belongs to another poll
            DuplicateVoteError: If the caller already voted
        """
        poll_id = PollId(UUID(request.poll_id))
        async with self.unit_of_work.transaction():
            vote = await self.poll_service.vote(
                poll_id,
                PollOptionId(UUID(request.option_id)),
                request.identity,
            )
            results = await self.poll_service.get_results(poll_id)

            return VotePollResponse(
                vote_id=str(vote.id),
                poll_id=str(vote.poll_id),
                option_id=str(vote.option_id),
                created_at=vote.created_at,
                results=results_to_response(results),
            )
