"""In-memory reply and player comment repositories for testing."""

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Generic, Optional, TypeVar
from uuid import UUID

from radar.domain.model.votable import DiscussionReply, PlayerComment, VotableContent
from radar.domain.repository.votable import (
    PlayerCommentRepository,
    ReplyRepository,
)

T = TypeVar("T", bound=VotableContent)


class _InMemoryVotableStore(Generic[T]):
    """Storage and counter logic shared by reply and comment repositories."""

    def __init__(self) -> None:
        self._items: dict[UUID, T] = {}
        self._locks: dict[UUID, asyncio.Lock] = {}

    async def find_by_id(self, content_id: UUID) -> Optional[T]:
        """Find an item by ID."""
        return self._items.get(content_id)

    async def save(self, content: T) -> T:
        """Save or update an item."""
        self._items[content.id] = content
        return content

    @asynccontextmanager
    async def locked(self, content_id: UUID) -> AsyncIterator[Optional[T]]:
        """Serialize read-modify-write on one item."""
        lock = self._locks.setdefault(content_id, asyncio.Lock())
        async with lock:
            yield self._items.get(content_id)

    async def apply_vote_delta(
        self, content_id: UUID, upvote_delta: int, downvote_delta: int
    ) -> Optional[T]:
        """Adjust both counters, never below zero."""
        item = self._items.get(content_id)
        if item is None:
            return None
        updated = item.model_copy(
            update={
                "upvotes": max(0, item.upvotes + upvote_delta),
                "downvotes": max(0, item.downvotes + downvote_delta),
            }
        )
        self._items[content_id] = updated
        return updated

    async def set_featured(self, content_id: UUID, is_featured: bool) -> Optional[T]:
        """Set the featured flag."""
        item = self._items.get(content_id)
        if item is None:
            return None
        updated = item.model_copy(update={"is_featured": is_featured})
        self._items[content_id] = updated
        return updated

    async def soft_delete(self, content_id: UUID, deleted_at: datetime) -> Optional[T]:
        """Mark an item deleted."""
        item = self._items.get(content_id)
        if item is None:
            return None
        updated = item.model_copy(
            update={
                "is_deleted": True,
                "deleted_at": deleted_at,
                "updated_at": deleted_at,
            }
        )
        self._items[content_id] = updated
        return updated


class InMemoryReplyRepository(_InMemoryVotableStore[DiscussionReply], ReplyRepository):
    """In-memory implementation of ReplyRepository for testing."""


class InMemoryPlayerCommentRepository(
    _InMemoryVotableStore[PlayerComment], PlayerCommentRepository
):
    """In-memory implementation of PlayerCommentRepository for testing."""
