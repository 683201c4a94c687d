"""Close poll use case."""

from uuid import UUID

from pydantic import BaseModel

from radar.domain.repository import UnitOfWork
from radar.domain.service import PollService
from radar.domain.value import PollId, UserId

from ..base import BaseUseCase


class ClosePollRequest(BaseModel):
    """Close poll request."""

    poll_id: str  # UUID string
    requester_id: str  # User ID from authenticated user


class ClosePollResponse(BaseModel):
    """Close poll response."""

    poll_id: str
    is_active: bool


class ClosePollUseCase(BaseUseCase):
    """Use case for closing a poll."""

    def __init__(
        self, poll_service: PollService, unit_of_work: UnitOfWork
    ) -> None:
        """Initialize close poll use case.

        Args:
            poll_service: Poll domain service
            unit_of_work: Transaction boundary for the writes
        """
        self.poll_service = poll_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: ClosePollRequest) -> ClosePollResponse:
        """Execute close poll flow.

        Raises:
            NotFoundError: If poll or requester not found
            AuthorizationError: If requester may not close the poll
        """
        async with self.unit_of_work.transaction():
            poll = await self.poll_service.close_poll(
                PollId(UUID(request.poll_id)), UserId(UUID(request.requester_id))
            )
        return ClosePollResponse(poll_id=str(poll.id), is_active=poll.is_active)
