"""Report content use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from radar.domain.repository import UnitOfWork
from radar.domain.service import ModerationService
from radar.domain.value import UserId, VotableType


class ReportContentRequest(BaseModel):
    """Report content request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    reporter_id: str  # User ID from authenticated user
    reason: str


class ReportContentResponse(BaseModel):
    """Report content response."""

    report_id: str
    votable_type: VotableType
    votable_id: str
    created_at: datetime


class ReportContentUseCase:
    """Use case for reporting a reply or comment."""

    def __init__(
        self, moderation_service: ModerationService, unit_of_work: UnitOfWork
    ) -> None:
        """Initialize report content use case.

        Args:
            moderation_service: Moderation domain service
            unit_of_work: Transaction boundary for the writes
        """
        self.moderation_service = moderation_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: ReportContentRequest) -> ReportContentResponse:
        async with self.unit_of_work.transaction():
            report = await self.moderation_service.report(
                request.votable_type,
                UUID(request.votable_id),
                UserId(UUID(request.reporter_id)),
                request.reason,
            )
        return ReportContentResponse(
            report_id=str(report.id),
            votable_type=report.votable_type,
            votable_id=str(report.votable_id),
            created_at=report.created_at,
        )
