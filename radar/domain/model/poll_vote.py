"""Poll vote entity.

Each row is one accepted vote. Rows are written once and never changed.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from radar.domain.model.common import DomainModel, utcnow
from radar.domain.value import PollId, PollOptionId, PollVoteId, UserId


class PollVote(DomainModel):
    """Vote on a poll option.

    Business rules:
    - At most one vote per (poll_id, voter_key), enforced by a database
      unique constraint
    - voter_key is "user:<id>" for registered voters, "ip:<address>" otherwise
    - user_id is withheld on anonymous polls; voter_key still deduplicates
    """

    id: PollVoteId
    poll_id: PollId
    option_id: PollOptionId
    voter_key: str = Field(min_length=1, max_length=300)
    user_id: Optional[UserId] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    is_anonymous: bool = False
    created_at: datetime = Field(default_factory=utcnow)
