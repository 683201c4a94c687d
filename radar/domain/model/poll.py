"""Poll aggregate.

A poll owns its options. Vote counters on the poll and its options are
denormalized and only ever changed together, one vote at a time.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from radar.domain.model.common import DomainModel, as_utc, utcnow
from radar.domain.model.user import DEFAULT_SCOUT_REPUTATION_THRESHOLD, User
from radar.domain.value import (
    PlayerId,
    PollId,
    PollOptionId,
    PollType,
    ThreadId,
    UserId,
)

# Column sizes in the polls and poll_options tables
MAX_QUESTION_LENGTH = 300
MAX_OPTION_TEXT_LENGTH = 200


class PollOption(DomainModel):
    """Selectable answer on a poll."""

    id: PollOptionId
    poll_id: PollId
    option_text: str = Field(min_length=1, max_length=MAX_OPTION_TEXT_LENGTH)
    vote_count: int = Field(default=0, ge=0)
    display_order: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)


class Poll(DomainModel):
    """Poll aggregate root.

    Business rules:
    - total_votes equals the sum of its options' vote counts
    - A poll accepts votes only while active and not past expires_at
    - Expiry is evaluated lazily; is_active may still be True after expiry
    """

    id: PollId
    author_id: UserId
    question: str = Field(min_length=1, max_length=MAX_QUESTION_LENGTH)
    description: Optional[str] = None
    poll_type: PollType = PollType.SINGLE_CHOICE
    thread_id: Optional[ThreadId] = None
    player_id: Optional[PlayerId] = None
    is_anonymous: bool = False
    is_active: bool = True
    expires_at: Optional[datetime] = None
    total_votes: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def is_expired(self, now: datetime | None = None) -> bool:
        """Whether the expiry timestamp has passed."""
        if self.expires_at is None:
            return False
        now = now or utcnow()
        return as_utc(now) > as_utc(self.expires_at)

    def accepts_votes(self, now: datetime | None = None) -> bool:
        """Whether a vote cast at ``now`` would be accepted."""
        return self.is_active and not self.is_expired(now)

    def can_be_closed_by(
        self, user: User, scout_threshold: int = DEFAULT_SCOUT_REPUTATION_THRESHOLD
    ) -> bool:
        """Authors and moderators may close a poll."""
        return user.id == self.author_id or user.can_moderate(scout_threshold)
