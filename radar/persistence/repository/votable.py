"""PostgreSQL implementations of reply and player comment repositories."""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncIterator, Callable, Dict, Generic, Optional, TypeVar
from uuid import UUID

from sqlalchemy import Table, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from radar.domain.model import DiscussionReply, PlayerComment, VotableContent
from radar.domain.model.common import utcnow
from radar.domain.repository import PlayerCommentRepository, ReplyRepository
from radar.persistence.mappers import (
    row_to_player_comment,
    row_to_reply,
    votable_to_dict,
)
from radar.persistence.tables import discussion_replies_table, player_comments_table

T = TypeVar("T", bound=VotableContent)


class _PostgresVotableStore(Generic[T]):
    """Shared SQL for tables with upvote/downvote counters."""

    table: Table
    row_to_model: Callable[[Dict[str, Any]], T]

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _map(self, row: Any) -> Optional[T]:
        return self.row_to_model(row._asdict()) if row else None

    async def find_by_id(self, content_id: UUID) -> Optional[T]:
        """Find an item by ID."""
        stmt = select(self.table).where(self.table.c.id == content_id)
        result = await self.session.execute(stmt)
        return self._map(result.fetchone())

    async def save(self, content: T) -> T:
        """Save an item (create or update)."""
        data = votable_to_dict(content)
        existing = await self.find_by_id(content.id)

        if existing:
            stmt = (
                update(self.table)
                .where(self.table.c.id == content.id)
                .values(**data)
            )
        else:
            stmt = insert(self.table).values(**data)

        await self.session.execute(stmt)
        await self.session.flush()
        return content

    @asynccontextmanager
    async def locked(self, content_id: UUID) -> AsyncIterator[Optional[T]]:
        """Lock the row with SELECT ... FOR UPDATE until the transaction ends."""
        stmt = (
            select(self.table).where(self.table.c.id == content_id).with_for_update()
        )
        result = await self.session.execute(stmt)
        yield self._map(result.fetchone())

    async def apply_vote_delta(
        self, content_id: UUID, upvote_delta: int, downvote_delta: int
    ) -> Optional[T]:
        """Adjust both counters in one UPDATE, floored at zero."""
        stmt = (
            update(self.table)
            .where(self.table.c.id == content_id)
            .values(
                upvotes=func.greatest(self.table.c.upvotes + upvote_delta, 0),
                downvotes=func.greatest(self.table.c.downvotes + downvote_delta, 0),
                updated_at=utcnow(),
            )
            .returning(self.table)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return self._map(result.fetchone())

    async def set_featured(self, content_id: UUID, is_featured: bool) -> Optional[T]:
        """Set the featured flag."""
        stmt = (
            update(self.table)
            .where(self.table.c.id == content_id)
            .values(is_featured=is_featured, updated_at=utcnow())
            .returning(self.table)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return self._map(result.fetchone())

    async def soft_delete(self, content_id: UUID, deleted_at: datetime) -> Optional[T]:
        """Mark an item deleted."""
        stmt = (
            update(self.table)
            .where(self.table.c.id == content_id)
            .values(is_deleted=True, deleted_at=deleted_at, updated_at=deleted_at)
            .returning(self.table)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return self._map(result.fetchone())


class PostgresReplyRepository(_PostgresVotableStore[DiscussionReply], ReplyRepository):
    """PostgreSQL implementation of ReplyRepository."""

    table = discussion_replies_table
    row_to_model = staticmethod(row_to_reply)


class PostgresPlayerCommentRepository(
    _PostgresVotableStore[PlayerComment], PlayerCommentRepository
):
    """PostgreSQL implementation of PlayerCommentRepository."""

    table = player_comments_table
    row_to_model = staticmethod(row_to_player_comment)
