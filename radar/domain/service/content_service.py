"""Votable content domain service.

Replies and player comments live in separate tables but are voted on,
reported and moderated the same way. This service picks the right
repository for a VotableType.
"""

from uuid import UUID

import logfire

from radar.domain.error import NotFoundError
from radar.domain.model import VotableContent
from radar.domain.repository import (
    PlayerCommentRepository,
    ReplyRepository,
    VotableRepository,
)
from radar.domain.value import VotableType

from .base import Service

_LABELS = {
    VotableType.REPLY: "reply",
    VotableType.PLAYER_COMMENT: "comment",
}


def describe(votable_type: VotableType) -> str:
    """Human label for a votable type, used in error messages."""
    return _LABELS[votable_type]


class ContentService(Service):
    """Domain service for replies and player comments."""

    def __init__(
        self,
        reply_repository: ReplyRepository,
        player_comment_repository: PlayerCommentRepository,
    ) -> None:
        """Initialize content service.

        Args:
            reply_repository: Reply repository
            player_comment_repository: Player comment repository
        """
        self.reply_repository = reply_repository
        self.player_comment_repository = player_comment_repository

    def repository_for(self, votable_type: VotableType) -> VotableRepository:
        """Repository holding items of the given type."""
        if votable_type == VotableType.REPLY:
            return self.reply_repository
        return self.player_comment_repository

    async def get_content(
        self, votable_type: VotableType, content_id: UUID
    ) -> VotableContent:
        """Get a reply or comment by ID (deleted items included).

        Raises:
            NotFoundError: If the item does not exist
        """
        content = await self.repository_for(votable_type).find_by_id(content_id)
        if not content:
            logfire.warn(
                "Votable content not found",
                votable_type=votable_type.value,
                content_id=str(content_id),
            )
            raise NotFoundError(describe(votable_type).capitalize(), str(content_id))
        return content
