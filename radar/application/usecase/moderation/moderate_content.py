"""Feature, unfeature and delete use cases."""

from uuid import UUID

from pydantic import BaseModel

from radar.domain.model import VotableContent
from radar.domain.repository import UnitOfWork
from radar.domain.service import ModerationService
from radar.domain.value import UserId, VotableType


class ContentStateResponse(BaseModel):
    """Moderation-relevant state of a reply or comment."""

    votable_type: VotableType
    votable_id: str
    is_featured: bool
    is_deleted: bool
    upvotes: int
    downvotes: int
    net_score: int


def content_to_response(content: VotableContent) -> ContentStateResponse:
    """Build a ContentStateResponse from a reply or comment."""
    return ContentStateResponse(
        votable_type=content.votable_type,
        votable_id=str(content.id),
        is_featured=content.is_featured,
        is_deleted=content.is_deleted,
        upvotes=content.upvotes,
        downvotes=content.downvotes,
        net_score=content.net_score,
    )


class FeatureContentRequest(BaseModel):
    """Feature or unfeature request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    requester_id: str  # User ID from authenticated user
    featured: bool = True


class FeatureContentUseCase:
    """Use case for featuring or unfeaturing a reply or comment."""

    def __init__(
        self, moderation_service: ModerationService, unit_of_work: UnitOfWork
    ) -> None:
        """Initialize feature content use case.

        Args:
            moderation_service: Moderation domain service
            unit_of_work: Transaction boundary for the writes
        """
        self.moderation_service = moderation_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: FeatureContentRequest) -> ContentStateResponse:
        """Execute feature flow.

        Raises:
            AuthorizationError: If requester cannot moderate
            NotFoundError: If requester or target not found
        """
        votable_id = UUID(request.votable_id)
        requester_id = UserId(UUID(request.requester_id))

        async with self.unit_of_work.transaction():
            if request.featured:
                content = await self.moderation_service.feature(
                    request.votable_type, votable_id, requester_id
                )
            else:
                content = await self.moderation_service.unfeature(
                    request.votable_type, votable_id, requester_id
                )
        return content_to_response(content)


class DeleteContentRequest(BaseModel):
    """Delete content request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    requester_id: str  # User ID from authenticated user


class DeleteContentUseCase:
    """Use case for soft deleting a reply or comment."""

    def __init__(
        self, moderation_service: ModerationService, unit_of_work: UnitOfWork
    ) -> None:
        """Initialize delete content use case.

        Args:
            moderation_service: Moderation domain service
            unit_of_work: Transaction boundary for the writes
        """
        self.moderation_service = moderation_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: DeleteContentRequest) -> ContentStateResponse:
        async with self.unit_of_work.transaction():
            content = await self.moderation_service.delete(
                request.votable_type,
                UUID(request.votable_id),
                UserId(UUID(request.requester_id)),
            )
        return content_to_response(content)
