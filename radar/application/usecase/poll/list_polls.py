"""List polls use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from radar.domain.service import PollService
from radar.domain.value import PlayerId, ThreadId

from ..base import BaseUseCase
from .get_poll import PollResponse, poll_to_response


class ListPollsRequest(BaseModel):
    """List polls request.

    Filters by player or thread; with neither, lists polls still
    accepting votes.
    """

    player_id: Optional[str] = None
    thread_id: Optional[str] = None
    limit: int = Field(default=20, ge=1, le=100)


class ListPollsResponse(BaseModel):
    """List polls response."""

    polls: list[PollResponse]


class ListPollsUseCase(BaseUseCase):
    """Use case for listing polls."""

    def __init__(self, poll_service: PollService) -> None:
        """Initialize list polls use case.

        Args:
            poll_service: Poll domain service
        """
        self.poll_service = poll_service

    async def execute(self, request: ListPollsRequest) -> ListPollsResponse:
        if request.player_id:
            polls = await self.poll_service.list_by_player(
                PlayerId(UUID(request.player_id)), request.limit
            )
        elif request.thread_id:
            polls = await self.poll_service.list_by_thread(
                ThreadId(UUID(request.thread_id)), request.limit
            )
        else:
            polls = await self.poll_service.list_active(request.limit)

        return ListPollsResponse(
            polls=[
                poll_to_response(poll, await self.poll_service.get_options(poll.id))
                for poll in polls
            ]
        )
