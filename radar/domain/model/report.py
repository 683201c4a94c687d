"""Moderation report entity."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from radar.domain.model.common import DomainModel, utcnow
from radar.domain.value import ReportId, UserId, VotableType


class ContentReport(DomainModel):
    """User-submitted flag on a reply or comment for moderator review."""

    id: ReportId
    votable_type: VotableType
    votable_id: UUID
    reporter_id: UserId
    reason: str = Field(min_length=1, max_length=500)
    created_at: datetime = Field(default_factory=utcnow)
