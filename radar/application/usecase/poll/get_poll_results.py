"""Get poll results use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from radar.domain.service import PollResults, PollService
from radar.domain.value import PollId

from ..base import BaseUseCase


class OptionResultResponse(BaseModel):
    """Tally for a single option."""

    option_id: str
    option_text: str
    vote_count: int
    percentage: float
    is_winning: bool


class PollResultsResponse(BaseModel):
    """Poll results, one entry per option in display order."""

    poll_id: str
    question: str
    total_votes: int
    is_active: bool
    accepting_votes: bool
    winning_option_id: Optional[str]
    options: list[OptionResultResponse]


def results_to_response(results: PollResults) -> PollResultsResponse:
    """Build a PollResultsResponse from computed results."""
    winner = next((r for r in results.options if r.is_winning), None)
    return PollResultsResponse(
        poll_id=str(results.poll.id),
        question=results.poll.question,
        total_votes=results.total_votes,
        is_active=results.poll.is_active,
        accepting_votes=results.poll.accepts_votes(),
        winning_option_id=str(winner.option.id) if winner else None,
        options=[
            OptionResultResponse(
                option_id=str(r.option.id),
                option_text=r.option.option_text,
                vote_count=r.count,
                percentage=r.percentage,
                is_winning=r.is_winning,
            )
            for r in results.options
        ],
    )


class GetPollResultsRequest(BaseModel):
    """Get poll results request."""

    poll_id: str  # UUID string


class GetPollResultsUseCase(BaseUseCase):
    """Use case for reading live poll results."""

    def __init__(self, poll_service: PollService) -> None:
        """Initialize get poll results use case.

        Args:
            poll_service: Poll domain service
        """
        self.poll_service = poll_service

    async def execute(self, request: GetPollResultsRequest) -> PollResultsResponse:
        """Execute get poll results flow.

        Raises:
            NotFoundError: If poll not found
        """
        results = await self.poll_service.get_results(PollId(UUID(request.poll_id)))
        return results_to_response(results)
