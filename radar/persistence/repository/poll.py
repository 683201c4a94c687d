"""PostgreSQL implementation of Poll repositories."""

from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import and_, desc, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from radar.domain.model import Poll, PollOption, PollVote
from radar.domain.model.common import utcnow
from radar.domain.repository import PollRepository, PollVoteRepository
from radar.domain.value import PlayerId, PollId, PollOptionId, ThreadId
from radar.persistence.mappers import (
    poll_option_to_dict,
    poll_to_dict,
    poll_vote_to_dict,
    row_to_poll,
    row_to_poll_option,
    row_to_poll_vote,
)
from radar.persistence.tables import (
    poll_options_table,
    poll_votes_table,
    polls_table,
)


class PostgresPollRepository(PollRepository):
    """PostgreSQL implementation of PollRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, poll: Poll, options: Sequence[PollOption]) -> Poll:
        """Insert a poll and its options in the current transaction."""
        await self.session.execute(insert(polls_table).values(**poll_to_dict(poll)))
        if options:
            await self.session.execute(
                insert(poll_options_table),
                [poll_option_to_dict(option) for option in options],
            )
        await self.session.flush()
        return poll

    async def find_by_id(self, poll_id: PollId) -> Optional[Poll]:
        """Find a poll by ID."""
        stmt = select(polls_table).where(polls_table.c.id == poll_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_poll(row._asdict()) if row else None

    async def find_options(self, poll_id: PollId) -> List[PollOption]:
        """Find a poll's options in display order."""
        stmt = (
            select(poll_options_table)
            .where(poll_options_table.c.poll_id == poll_id)
            .order_by(poll_options_table.c.display_order)
        )
        result = await self.session.execute(stmt)
        return [row_to_poll_option(row._asdict()) for row in result.fetchall()]

    async def find_option_by_id(self, option_id: PollOptionId) -> Optional[PollOption]:
        """Find an option by ID."""
        stmt = select(poll_options_table).where(poll_options_table.c.id == option_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_poll_option(row._asdict()) if row else None

    async def set_active(
        self, poll_id: PollId, is_active: bool, updated_at: datetime
    ) -> None:
        """Set the active flag on a poll."""
        stmt = (
            update(polls_table)
            .where(polls_table.c.id == poll_id)
            .values(is_active=is_active, updated_at=updated_at)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def deactivate_expired(self, now: datetime) -> int:
        """Deactivate active polls past their expiry in one statement."""
        stmt = (
            update(polls_table)
            .where(
                and_(
                    polls_table.c.is_active.is_(True),
                    polls_table.c.expires_at.is_not(None),
                    polls_table.c.expires_at < now,
                )
            )
            .values(is_active=False, updated_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def find_active(self, now: datetime, limit: int = 20) -> List[Poll]:
        """Find polls still accepting votes, newest first."""
        stmt = (
            select(polls_table)
            .where(
                and_(
                    polls_table.c.is_active.is_(True),
                    or_(
                        polls_table.c.expires_at.is_(None),
                        polls_table.c.expires_at >= now,
                    ),
                )
            )
            .order_by(desc(polls_table.c.created_at))
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_poll(row._asdict()) for row in result.fetchall()]

    async def find_by_player(self, player_id: PlayerId, limit: int = 20) -> List[Poll]:
        """Find polls attached to a player, newest first."""
        stmt = (
            select(polls_table)
            .where(polls_table.c.player_id == player_id)
            .order_by(desc(polls_table.c.created_at))
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_poll(row._asdict()) for row in result.fetchall()]

    async def find_by_thread(self, thread_id: ThreadId, limit: int = 20) -> List[Poll]:
        """Find polls attached to a thread, newest first."""
        stmt = (
            select(polls_table)
            .where(polls_table.c.thread_id == thread_id)
            .order_by(desc(polls_table.c.created_at))
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_poll(row._asdict()) for row in result.fetchall()]


class PostgresPollVoteRepository(PollVoteRepository):
    """PostgreSQL implementation of PollVoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def record_vote(self, vote: PollVote) -> PollVote:
        """Insert the ledger row, then bump counters with SQL increments.

        The insert is flushed first so a duplicate fails on the unique
        constraint before any counter moves.
        """
        await self.session.execute(
            insert(poll_votes_table).values(**poll_vote_to_dict(vote))
        )
        await self.session.flush()

        await self.session.execute(
            update(poll_options_table)
            .where(
                and_(
                    poll_options_table.c.id == vote.option_id,
                    poll_options_table.c.poll_id == vote.poll_id,
                )
            )
            .values(vote_count=poll_options_table.c.vote_count + 1)
        )
        await self.session.execute(
            update(polls_table)
            .where(polls_table.c.id == vote.poll_id)
            .values(total_votes=polls_table.c.total_votes + 1, updated_at=utcnow())
        )
        await self.session.flush()
        return vote

    async def exists(self, poll_id: PollId, voter_key: str) -> bool:
        """Check whether a voter has voted on a poll."""
        stmt = (
            select(poll_votes_table.c.id)
            .where(
                and_(
                    poll_votes_table.c.poll_id == poll_id,
                    poll_votes_table.c.voter_key == voter_key,
                )
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def find_by_voter(self, poll_id: PollId, voter_key: str) -> List[PollVote]:
        """Find a voter's votes on a poll."""
        stmt = select(poll_votes_table).where(
            and_(
                poll_votes_table.c.poll_id == poll_id,
                poll_votes_table.c.voter_key == voter_key,
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_poll_vote(row._asdict()) for row in result.fetchall()]

    async def count_by_poll(self, poll_id: PollId) -> int:
        """Count ledger rows for a poll."""
        stmt = (
            select(func.count())
            .select_from(poll_votes_table)
            .where(poll_votes_table.c.poll_id == poll_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()
