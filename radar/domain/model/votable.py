"""Votable content: discussion replies and player comments.

Both carry denormalized upvote/downvote counters that mirror the vote
ledger. The net score is always derived from the two counters.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from radar.domain.model.common import DomainModel, utcnow
from radar.domain.model.user import DEFAULT_SCOUT_REPUTATION_THRESHOLD, User
from radar.domain.value import (
    CommentId,
    PlayerId,
    ReplyId,
    ThreadId,
    UserId,
    VotableType,
)

# Minimum number of votes before a split is considered controversial
CONTROVERSIAL_MIN_VOTES = 10


class VotableContent(DomainModel):
    """Shared shape of reply and comment."""

    author_id: UserId
    content: str = Field(min_length=1, max_length=10000)
    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)
    is_featured: bool = False
    is_deleted: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    deleted_at: Optional[datetime] = None

    @property
    def net_score(self) -> int:
        return self.upvotes - self.downvotes

    @property
    def total_votes(self) -> int:
        return self.upvotes + self.downvotes

    @property
    def upvote_ratio(self) -> float:
        if self.total_votes == 0:
            return 0.0
        return self.upvotes / self.total_votes

    @property
    def is_controversial(self) -> bool:
        """Close to a 50/50 split with enough votes to matter."""
        if self.total_votes < CONTROVERSIAL_MIN_VOTES:
            return False
        return 0.4 <= self.upvote_ratio <= 0.6

    def can_be_deleted_by(
        self, user: User, scout_threshold: int = DEFAULT_SCOUT_REPUTATION_THRESHOLD
    ) -> bool:
        return user.id == self.author_id or user.can_moderate(scout_threshold)


class DiscussionReply(VotableContent):
    """Reply in a discussion thread, optionally nested under another reply."""

    votable_type: VotableType = VotableType.REPLY

    id: ReplyId
    thread_id: ThreadId
    parent_id: Optional[ReplyId] = None


class PlayerComment(VotableContent):
    """Comment on a player profile, optionally nested under another comment."""

    votable_type: VotableType = VotableType.PLAYER_COMMENT

    id: CommentId
    player_id: PlayerId
    parent_id: Optional[CommentId] = None
