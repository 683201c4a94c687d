"""User entity (collaborator).

Users are managed by the wider platform; the engagement core only reads
them to authorise poll closure and moderation.
"""

from datetime import datetime

from pydantic import Field

from radar.domain.model.common import DomainModel, utcnow
from radar.domain.value import UserId, UserRole

DEFAULT_SCOUT_REPUTATION_THRESHOLD = 25


class User(DomainModel):
    """Platform user."""

    id: UserId
    username: str = Field(min_length=1, max_length=50)
    role: UserRole = UserRole.USER
    reputation_score: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)

    def can_moderate(
        self, scout_threshold: int = DEFAULT_SCOUT_REPUTATION_THRESHOLD
    ) -> bool:
        """Whether this user may close others' polls and feature content.

        Admins and coaches always can; scouts once their reputation
        reaches the threshold.
        """
        if self.role in (UserRole.ADMIN, UserRole.COACH):
            return True
        return self.role == UserRole.SCOUT and self.reputation_score >= scout_threshold
