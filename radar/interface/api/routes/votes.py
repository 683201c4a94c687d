"""Reply and comment vote routes."""

from enum import Enum
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request
from pydantic import BaseModel

from radar.application.usecase.vote import (
    VoteContentRequest,
    VoteContentResponse,
    VoteContentUseCase,
)
from radar.domain.value import VotableType
from radar.interface.api.identity import IdentityResolver

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class ContentCollection(str, Enum):
    """URL collection names for votable content."""

    REPLIES = "replies"
    COMMENTS = "comments"

    @property
    def votable_type(self) -> VotableType:
        if self is ContentCollection.REPLIES:
            return VotableType.REPLY
        return VotableType.PLAYER_COMMENT


class VoteAPIRequest(BaseModel):
    """API request for voting on content."""

    is_upvote: bool


@router.post("/{collection}/{content_id}/vote", response_model=VoteContentResponse)
async def vote_on_content(
    collection: ContentCollection,
    content_id: UUID,
    request: VoteAPIRequest,
    http_request: Request,
    vote_content_use_case: FromDishka[VoteContentUseCase],
    identity_resolver: FromDishka[IdentityResolver],
) -> VoteContentResponse:
    """Upvote or downvote a reply or player comment.

    Requires authentication. Repeating the same vote retracts it;
    voting the other way switches it.

    Args:
        collection: "replies" or "comments"
        content_id: Reply or comment UUID
        request: Vote direction
        http_request: Incoming request, used to resolve the voter
        vote_content_use_case: Vote content use case from DI
        identity_resolver: Identity resolver from DI

    Returns:
        Outcome and the content's counters after the vote
    """
    identity = identity_resolver.resolve(http_request)
    return await vote_content_use_case.execute(
        VoteContentRequest(
            votable_type=collection.votable_type,
            votable_id=str(content_id),
            identity=identity,
            is_upvote=request.is_upvote,
        )
    )
