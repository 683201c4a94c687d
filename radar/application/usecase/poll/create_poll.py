"""Create poll use case."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from radar.domain.repository import UnitOfWork
from radar.domain.service import PollService
from radar.domain.value import PlayerId, PollType, ThreadId, UserId

from ..base import BaseUseCase
from .get_poll import PollResponse, poll_to_response


class CreatePollRequest(BaseModel):
    """Create poll request."""

    author_id: str  # User ID from authenticated user
    question: str
    options: list[str]
    description: Optional[str] = None
    poll_type: PollType = PollType.SINGLE_CHOICE
    thread_id: Optional[str] = None
    player_id: Optional[str] = None
    expires_at: Optional[datetime] = None
    is_anonymous: bool = False


class CreatePollUseCase(BaseUseCase):
    """Use case for creating a poll."""

    def __init__(
        self, poll_service: PollService, unit_of_work: UnitOfWork
    ) -> None:
        """Initialize create poll use case.

        Args:
            poll_service: Poll domain service
            unit_of_work: Transaction boundary for the writes
        """
        self.poll_service = poll_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: CreatePollRequest) -> PollResponse:
        """Execute create poll flow.

        Args:
            request: Create poll request

        Returns:
            The new poll with its options

        Raises:
            ValidationError: If the poll definition is invalid
            NotFoundError: If author, thread or player not found
        """
        thread_id = ThreadId(UUID(request.thread_id)) if request.thread_id else None
        player_id = PlayerId(UUID(request.player_id)) if request.player_id else None

        async with self.unit_of_work.transaction():
            poll = await self.poll_service.create_poll(
                author_id=UserId(UUID(request.author_id)),
                question=request.question,
                option_texts=request.options,
                description=request.description,
                poll_type=request.poll_type,
                thread_id=thread_id,
                player_id=player_id,
                expires_at=request.expires_at,
                is_anonymous=request.is_anonymous,
            )
            options = await self.poll_service.get_options(poll.id)
            return poll_to_response(poll, options)
