"""Player entity (collaborator)."""

from datetime import datetime

from pydantic import Field

from radar.domain.model.common import DomainModel, utcnow
from radar.domain.value import PlayerId


class Player(DomainModel):
    """Scouted player that comments and polls can attach to."""

    id: PlayerId
    name: str = Field(min_length=1, max_length=100)
    created_at: datetime = Field(default_factory=utcnow)
