"""Discussion thread entity (collaborator)."""

from datetime import datetime

from pydantic import Field

from radar.domain.model.common import DomainModel, utcnow
from radar.domain.value import ThreadId, UserId


class DiscussionThread(DomainModel):
    """Discussion thread that replies and polls can attach to."""

    id: ThreadId
    title: str = Field(min_length=1, max_length=200)
    author_id: UserId
    created_at: datetime = Field(default_factory=utcnow)
