"""Vote entity for replies and player comments.

Votes are registered-user only and follow toggle semantics: voting the
same direction twice retracts, voting the other direction flips.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from radar.domain.model.common import DomainModel, utcnow
from radar.domain.value import UserId, VotableType, VoteId, VoteType


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per item (enforced by database unique constraint)
    - Polymorphic reference to votable (reply or player comment)
    """

    id: VoteId
    user_id: UserId
    votable_type: VotableType
    votable_id: UUID  # ReplyId or CommentId (both are UUIDs)
    vote_type: VoteType
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
