"""Moderation routes: reports, featuring and deletion."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request, status
from pydantic import BaseModel, Field

from radar.application.usecase.moderation import (
    ContentStateResponse,
    DeleteContentRequest,
    DeleteContentUseCase,
    FeatureContentRequest,
    FeatureContentUseCase,
    ReportContentRequest,
    ReportContentResponse,
    ReportContentUseCase,
)
from radar.interface.api.identity import IdentityResolver, require_registered
from radar.interface.api.routes.votes import ContentCollection

router = APIRouter(tags=["moderation"], route_class=DishkaRoute)


class ReportAPIRequest(BaseModel):
    """API request for reporting content."""

    reason: str = Field(min_length=1)


@router.post(
    "/{collection}/{content_id}/report",
    response_model=ReportContentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def report_content(
    collection: ContentCollection,
    content_id: UUID,
    request: ReportAPIRequest,
    http_request: Request,
    report_content_use_case: FromDishka[ReportContentUseCase],
    identity_resolver: FromDishka[IdentityResolver],
) -> ReportContentResponse:
    """Report a reply or comment for moderator review.

    Requires authentication.
    """
    reporter_id = require_registered(identity_resolver.resolve(http_request))
    return await report_content_use_case.execute(
        ReportContentRequest(
            votable_type=collection.votable_type,
            votable_id=str(content_id),
            reporter_id=str(reporter_id),
            reason=request.reason,
        )
    )


@router.post("/{collection}/{content_id}/feature", response_model=ContentStateResponse)
async def feature_content(
    collection: ContentCollection,
    content_id: UUID,
    http_request: Request,
    feature_content_use_case: FromDishka[FeatureContentUseCase],
    identity_resolver: FromDishka[IdentityResolver],
) -> ContentStateResponse:
    """Feature a reply or comment. Moderators only."""
    requester_id = require_registered(identity_resolver.resolve(http_request))
    return await feature_content_use_case.execute(
        FeatureContentRequest(
            votable_type=collection.votable_type,
            votable_id=str(content_id),
            requester_id=str(requester_id),
            featured=True,
        )
    )


@router.delete(
    "/{collection}/{content_id}/feature", response_model=ContentStateResponse
)
async def unfeature_content(
    collection: ContentCollection,
    content_id: UUID,
    http_request: Request,
    feature_content_use_case: FromDishka[FeatureContentUseCase],
    identity_resolver: FromDishka[IdentityResolver],
) -> ContentStateResponse:
    """Remove the featured flag. Moderators only."""
    requester_id = require_registered(identity_resolver.resolve(http_request))
    return await feature_content_use_case.execute(
        FeatureContentRequest(
            votable_type=collection.votable_type,
            votable_id=str(content_id),
            requester_id=str(requester_id),
            featured=False,
        )
    )


@router.delete("/{collection}/{content_id}", response_model=ContentStateResponse)
async def delete_content(
    collection: ContentCollection,
    content_id: UUID,
    http_request: Request,
    delete_content_use_case: FromDishka[DeleteContentUseCase],
    identity_resolver: FromDishka[IdentityResolver],
) -> ContentStateResponse:
    """Soft-delete a reply or comment.

    The author or a moderator may delete. Deleting twice is a no-op.
    """
    requester_id = require_registered(identity_resolver.resolve(http_request))
    return await delete_content_use_case.execute(
        DeleteContentRequest(
            votable_type=collection.votable_type,
            votable_id=str(content_id),
            requester_id=str(requester_id),
        )
    )
