"""Get poll use case."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from radar.domain.model import Poll, PollOption
from radar.domain.service import PollService
from radar.domain.value import Identity, PollId, PollType

from ..base import BaseUseCase


class PollOptionResponse(BaseModel):
    """Poll option as shown to voters."""

    option_id: str
    option_text: str
    vote_count: int
    display_order: int


class PollResponse(BaseModel):
    """Poll with options and the caller's vote state."""

    poll_id: str
    author_id: str
    question: str
    description: Optional[str]
    poll_type: PollType
    thread_id: Optional[str]
    player_id: Optional[str]
    is_anonymous: bool
    is_active: bool
    accepting_votes: bool
    expires_at: Optional[datetime]
    total_votes: int
    created_at: datetime
    options: list[PollOptionResponse]
    has_voted: bool = False
    voted_option_ids: list[str] = []


def poll_to_response(
    poll: Poll,
    options: list[PollOption],
    voted_option_ids: Optional[list[str]] = None,
) -> PollResponse:
    """Build a PollResponse from domain models."""
    voted = voted_option_ids or []
    return PollResponse(
        poll_id=str(poll.id),
        author_id=str(poll.author_id),
        question=poll.question,
        description=poll.description,
        poll_type=poll.poll_type,
        thread_id=str(poll.thread_id) if poll.thread_id else None,
        player_id=str(poll.player_id) if poll.player_id else None,
        is_anonymous=poll.is_anonymous,
        is_active=poll.is_active,
        accepting_votes=poll.accepts_votes(),
        expires_at=poll.expires_at,
        total_votes=poll.total_votes,
        created_at=poll.created_at,
        options=[
            PollOptionResponse(
                option_id=str(o.id),
                option_text=o.option_text,
                vote_count=o.vote_count,
                display_order=o.display_order,
            )
            for o in options
        ],
        has_voted=bool(voted),
        voted_option_ids=voted,
    )


class GetPollRequest(BaseModel):
    """Get poll request."""

    poll_id: str  # UUID string
    identity: Optional[Identity] = None  # Caller, to report their vote state


class GetPollUseCase(BaseUseCase):
    """Use case for retrieving a poll with its options."""

    def __init__(self, poll_service: PollService) -> None:
        """Initialize get poll use case.

        Args:
            poll_service: Poll domain service
        """
        self.poll_service = poll_service

    async def execute(self, request: GetPollRequest) -> PollResponse:
        """Execute get poll flow.

        Raises:
            NotFoundError: If poll not found
        """
        poll_id = PollId(UUID(request.poll_id))
        poll = await self.poll_service.get_poll(poll_id)
        options = await self.poll_service.get_options(poll_id)

        voted: list[str] = []
        if request.identity is not None:
            voted = [
                str(option_id)
                for option_id in await self.poll_service.get_voted_option_ids(
                    poll_id, request.identity
                )
            ]

        return poll_to_response(poll, options, voted)
