"""Repository interfaces for votable content (replies and player comments)."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from datetime import datetime
from typing import Generic, Optional, TypeVar
from uuid import UUID

from radar.domain.model.votable import DiscussionReply, PlayerComment, VotableContent

T = TypeVar("T", bound=VotableContent)


class VotableRepository(ABC, Generic[T]):
    """Shared contract for content that carries vote counters."""

    @abstractmethod
    async def find_by_id(self, content_id: UUID) -> Optional[T]:
        """Find an item by ID (deleted items included)."""
        pass

    @abstractmethod
    async def save(self, content: T) -> T:
        """Save an item (create or update)."""
        pass

    @abstractmethod
    def locked(self, content_id: UUID) -> AbstractAsyncContextManager[Optional[T]]:
        """Hold an exclusive lock on one item for a read-modify-write.

        Concurrent voters on the same item are serialized for the duration
        of the block. Yields the current item, or None if it does not exist.
        """
        pass

    @abstractmethod
    async def apply_vote_delta(
        self, content_id: UUID, upvote_delta: int, downvote_delta: int
    ) -> Optional[T]:
        """Atomically adjust both vote counters.

        Args:
            content_id: Item ID
            upvote_delta: Change to upvotes (-1, 0 or 1)
            downvote_delta: Change to downvotes (-1, 0 or 1)

        Returns:
            The updated item, or None if it does not exist
        """
        pass

    @abstractmethod
    async def set_featured(
        self, content_id: UUID, is_featured: bool
    ) -> Optional[T]:
        """Set the featured flag. Vote counters are untouched."""
        pass

    @abstractmethod
    async def soft_delete(self, content_id: UUID, deleted_at: datetime) -> Optional[T]:
        """Mark an item deleted."""
        pass


class ReplyRepository(VotableRepository[DiscussionReply]):
    """Repository for DiscussionReply entity."""


class PlayerCommentRepository(VotableRepository[PlayerComment]):
    """Repository for PlayerComment entity."""
