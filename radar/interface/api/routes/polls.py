"""Poll routes."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, Request, status
from pydantic import BaseModel, Field

from radar.application.usecase.poll import (
    ClosePollRequest,
    ClosePollResponse,
    ClosePollUseCase,
    CreatePollRequest,
    CreatePollUseCase,
    GetPollRequest,
    GetPollResultsRequest,
    GetPollResultsUseCase,
    GetPollUseCase,
    ListPollsRequest,
    ListPollsResponse,
    ListPollsUseCase,
    PollResponse,
    PollResultsResponse,
    VotePollRequest,
    VotePollResponse,
    VotePollUseCase,
)
from radar.domain.value import PollType
from radar.interface.api.identity import IdentityResolver, require_registered

router = APIRouter(prefix="/polls", tags=["polls"], route_class=DishkaRoute)


class CreatePollAPIRequest(BaseModel):
    """API request for creating a poll."""

    question: str = Field(min_length=1)
    options: list[str] = Field(min_length=1)
    description: Optional[str] = None
    poll_type: PollType = PollType.SINGLE_CHOICE
    thread_id: Optional[UUID] = None
    player_id: Optional[UUID] = None
    expires_at: Optional[datetime] = None
    is_anonymous: bool = False


@router.post("", response_model=PollResponse, status_code=status.HTTP_201_CREATED)
async def create_poll(
    request: CreatePollAPIRequest,
    http_request: Request,
    create_poll_use_case: FromDishka[CreatePollUseCase],
    identity_resolver: FromDishka[IdentityResolver],
) -> PollResponse:
    """Create a poll.

    Requires authentication. Option count and lengths are validated by
    the poll service against the configured limits.
    """
    author_id = require_registered(identity_resolver.resolve(http_request))

    return await create_poll_use_case.execute(
        CreatePollRequest(
            author_id=str(author_id),
            question=request.question,
            options=request.options,
            description=request.description,
            poll_type=request.poll_type,
            thread_id=str(request.thread_id) if request.thread_id else None,
            player_id=str(request.player_id) if request.player_id else None,
            expires_at=request.expires_at,
            is_anonymous=request.is_anonymous,
        )
    )


@router.get("", response_model=ListPollsResponse)
async def list_polls(
    list_polls_use_case: FromDishka[ListPollsUseCase],
    player_id: Optional[UUID] = Query(default=None),
    thread_id: Optional[UUID] = Query(default=None),
    limit: int = Query(default=20, ge=1, le=100),
) -> ListPollsResponse:
    """List polls.

    Filters by player or thread when given, otherwise returns the
    polls currently accepting votes.
    """
    return await list_polls_use_case.execute(
        ListPollsRequest(
            player_id=str(player_id) if player_id else None,
            thread_id=str(thread_id) if thread_id else None,
            limit=limit,
        )
    )


@router.get("/{poll_id}", response_model=PollResponse)
async def get_poll(
    poll_id: UUID,
    http_request: Request,
    get_poll_use_case: FromDishka[GetPollUseCase],
    identity_resolver: FromDishka[IdentityResolver],
) -> PollResponse:
    """Get a poll with its options and the caller's vote state."""
    identity = identity_resolver.resolve(http_request)
    return await get_poll_use_case.execute(
        GetPollRequest(poll_id=str(poll_id), identity=identity)
    )


@router.post("/{poll_id}/vote", response_model=VotePollResponse)
async def vote_on_poll(
    poll_id: UUID,
    http_request: Request,
    vote_poll_use_case: FromDishka[VotePollUseCase],
    identity_resolver: FromDishka[IdentityResolver],
    option_id: UUID = Query(),
) -> VotePollResponse:
    """Cast a vote for one option.

    Open to registered and anonymous callers. Anonymous callers are
    deduplicated by client IP.

    Args:
        poll_id: Poll UUID
        http_request: Incoming request, used to resolve the voter
        vote_poll_use_case: Vote poll use case from DI
        identity_resolver: Identity resolver from DI
        option_id: Option UUID

    Returns:
        Vote details and results after the vote
    """
    identity = identity_resolver.resolve(http_request)
    return await vote_poll_use_case.execute(
        VotePollRequest(
            poll_id=str(poll_id),
            option_id=str(option_id),
            identity=identity,
        )
    )


@router.get("/{poll_id}/results", response_model=PollResultsResponse)
async def get_poll_results(
    poll_id: UUID,
    get_poll_results_use_case: FromDishka[GetPollResultsUseCase],
) -> PollResultsResponse:
    """Get vote counts, percentages and the winning option."""
    return await get_poll_results_use_case.execute(
        GetPollResultsRequest(poll_id=str(poll_id))
    )


@router.post("/{poll_id}/close", response_model=ClosePollResponse)
async def close_poll(
    poll_id: UUID,
    http_request: Request,
    close_poll_use_case: FromDishka[ClosePollUseCase],
    identity_resolver: FromDishka[IdentityResolver],
) -> ClosePollResponse:
    """Close a poll.

    Only the poll author or a moderator may close it.
    """
    requester_id = require_registered(identity_resolver.resolve(http_request))
    return await close_poll_use_case.execute(
        ClosePollRequest(poll_id=str(poll_id), requester_id=str(requester_id))
    )
