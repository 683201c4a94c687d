"""Vote on reply or comment use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from radar.domain.repository import UnitOfWork
from radar.domain.service import ContentVoteService
from radar.domain.value import Identity, VotableType, VoteOutcome, VoteType


class VoteContentRequest(BaseModel):
    """Vote on reply/comment request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    identity: Identity
    is_upvote: bool


class VoteContentResponse(BaseModel):
    """Vote on reply/comment response."""

    votable_type: VotableType
    votable_id: str
    outcome: VoteOutcome
    vote_type: Optional[VoteType]  # None once retracted
    upvotes: int
    downvotes: int
    net_score: int


class VoteContentUseCase:
    """Use case for casting, flipping or retracting a vote."""

    def __init__(
        self, content_vote_service: ContentVoteService, unit_of_work: UnitOfWork
    ) -> None:
        """Initialize vote content use case.

        Args:
            content_vote_service: Content vote domain service
            unit_of_work: Transaction boundary for the writes
        """
        self.content_vote_service = content_vote_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: VoteContentRequest) -> VoteContentResponse:
        """Execute vote flow.

        Raises:
            AuthenticationRequiredError: If the caller is anonymous
            NotFoundError: If the target does not exist
            ValidationError: If the target has been deleted
        """
        async with self.unit_of_work.transaction():
            result = await self.content_vote_service.vote(
                request.votable_type,
                UUID(request.votable_id),
                request.identity,
                request.is_upvote,
            )

        return VoteContentResponse(
            votable_type=request.votable_type,
            votable_id=request.votable_id,
            outcome=result.outcome,
            vote_type=result.vote_type,
            upvotes=result.upvotes,
            downvotes=result.downvotes,
            net_score=result.net_score,
        )
